"""
Script: image_ci/skip_lists.py
What: Loads and applies the per-category skip rules.
Doing: Reads `skip-images.json`, validates its shape, and answers "is this tag skipped?" per category.
Why: Old images are already built (or cannot be tested), and listing them as data keeps generation logic untouched when the list changes.
Goal: Keep the generated job list short without silently losing new images.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import semver

from image_ci.common import ImageCiError, InvalidSemanticVersion
from image_ci.scan import BASE, BROWSERS, INCLUDED


DEFAULT_SKIP_FILE = Path(__file__).with_name("skip-images.json")


@dataclass(frozen=True)
class SkipLists:
    base: frozenset[str] = frozenset()
    browsers: frozenset[str] = frozenset()
    # Included images older than this Cypress version are skipped.
    included_min_version: Optional[semver.Version] = None
    base_skip_version_check: frozenset[str] = frozenset()
    browsers_skip_version_check: frozenset[str] = frozenset()

    def is_base_skipped(self, tag: str) -> bool:
        return tag in self.base

    def is_browser_skipped(self, tag: str) -> bool:
        return tag in self.browsers

    def is_included_skipped(self, tag: str) -> bool:
        """True when `tag` is a semantic version ordered strictly before the threshold."""
        version = parse_semver(tag, INCLUDED)
        if self.included_min_version is None:
            return False
        return version < self.included_min_version

    def is_skipped(self, category: str, tag: str) -> bool:
        if category == BASE:
            return self.is_base_skipped(tag)
        if category == BROWSERS:
            return self.is_browser_skipped(tag)
        if category == INCLUDED:
            return self.is_included_skipped(tag)
        raise ImageCiError(f"Unknown image category: {category}")


def parse_semver(tag: str, category: str) -> semver.Version:
    """Parse a tag as a strict semantic version, naming tag and category on failure."""
    try:
        return semver.Version.parse(tag)
    except (ValueError, TypeError) as exc:
        raise InvalidSemanticVersion(
            f"Image tag \"{tag}\" in {category}/ is not a valid semantic version"
        ) from exc


def _string_list(data: dict, section: str, key: str) -> frozenset[str]:
    values = data.get(key, [])
    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        raise ImageCiError(f"Skip file field {section}.{key} must be a list of strings")
    return frozenset(values)


def _section(document: dict, name: str) -> dict:
    section = document.get(name, {})
    if not isinstance(section, dict):
        raise ImageCiError(f"Skip file section {name} must be an object")
    return section


def skip_lists_from_dict(document: dict) -> SkipLists:
    """Build `SkipLists` from the decoded JSON document."""
    if not isinstance(document, dict):
        raise ImageCiError("Skip file must contain a JSON object")

    base = _section(document, BASE)
    browsers = _section(document, BROWSERS)
    included = _section(document, INCLUDED)

    min_version_text = included.get("min_version")
    min_version = None
    if min_version_text is not None:
        if not isinstance(min_version_text, str):
            raise ImageCiError("Skip file field included.min_version must be a string")
        try:
            min_version = semver.Version.parse(min_version_text)
        except ValueError as exc:
            raise ImageCiError(
                f"Skip file field included.min_version is not a semantic version: {min_version_text}"
            ) from exc

    return SkipLists(
        base=_string_list(base, BASE, "skip"),
        browsers=_string_list(browsers, BROWSERS, "skip"),
        included_min_version=min_version,
        base_skip_version_check=_string_list(base, BASE, "skip_version_check"),
        browsers_skip_version_check=_string_list(browsers, BROWSERS, "skip_version_check"),
    )


def load_skip_lists(skip_file: Path = DEFAULT_SKIP_FILE) -> SkipLists:
    if not skip_file.exists():
        raise ImageCiError(f"Skip file not found: {skip_file}")
    try:
        with skip_file.open("r", encoding="utf-8") as handle:
            document = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ImageCiError(f"Skip file is not valid JSON: {skip_file}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ImageCiError(f"Could not read skip file {skip_file}: {exc}") from exc
    return skip_lists_from_dict(document)
