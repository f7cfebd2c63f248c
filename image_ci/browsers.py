"""
Script: image_ci/browsers.py
What: Reads the browser versions encoded in a browser image tag.
Doing: Splits tags like `node12.14.1-chrome83-ff77` into components and maps typed components to browser labels.
Why: The generated job checks that the built image really ships the browsers named by its folder.
Goal: Turn each browser tag into a structured `BrowserVersions` record, or fail loudly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from image_ci.common import UnclassifiableBrowserTag


# Component grammar: `<prefix><digits>` with anything after the digits ignored,
# so `ff78esr` still reads as Firefox 78.
COMPONENT_RE = re.compile(r"^(chrome|ff|edge)([0-9]+)")

# Chrome may lead the tag (old images like `chrome67-ff57`), the others may not.
FIRST_COMPONENT_PREFIXES = ("chrome",)

LABEL_FORMATS = {
    "chrome": "Google Chrome {}",
    "ff": "Mozilla Firefox {}",
    "edge": "Microsoft Edge {}",
}


@dataclass(frozen=True)
class BrowserVersions:
    chrome: Optional[str] = None
    firefox: Optional[str] = None
    edge: Optional[str] = None

    def has_browser(self) -> bool:
        return bool(self.chrome or self.firefox or self.edge)

    def as_parameters(self) -> list[tuple[str, str]]:
        """Return job parameters for every detected browser, in a fixed order."""
        parameters = [
            ("chromeVersion", self.chrome),
            ("firefoxVersion", self.firefox),
            ("edgeVersion", self.edge),
        ]
        return [(key, value) for key, value in parameters if value]


def full_chrome_version(version: str) -> str:
    return LABEL_FORMATS["chrome"].format(version)


def full_firefox_version(version: str) -> str:
    return LABEL_FORMATS["ff"].format(version)


def full_edge_version(version: str) -> str:
    return LABEL_FORMATS["edge"].format(version)


def _browser_components(tag: str) -> dict[str, str]:
    """Map browser prefix to its version digits; the first match per prefix wins."""
    found: dict[str, str] = {}
    for index, component in enumerate(tag.split("-")):
        match = COMPONENT_RE.match(component)
        if not match:
            continue
        prefix, digits = match.group(1), match.group(2)
        if index == 0 and prefix not in FIRST_COMPONENT_PREFIXES:
            continue
        found.setdefault(prefix, digits)
    return found


def find_chrome_version(tag: str) -> Optional[str]:
    """Return `Google Chrome XX` for a tag like `nodeX.Y.Z-chromeXX`, else None."""
    digits = _browser_components(tag).get("chrome")
    return full_chrome_version(digits) if digits else None


def find_firefox_version(tag: str) -> Optional[str]:
    """Return `Mozilla Firefox YY` for a tag like `nodeX.Y.Z-chromeXX-ffYY`, else None."""
    digits = _browser_components(tag).get("ff")
    return full_firefox_version(digits) if digits else None


def find_edge_version(tag: str) -> Optional[str]:
    """Return `Microsoft Edge XX` for a tag like `nodeX.Y.Z-edgeXX`, else None."""
    digits = _browser_components(tag).get("edge")
    return full_edge_version(digits) if digits else None


def parse_browser_tag(tag: str) -> BrowserVersions:
    components = _browser_components(tag)
    return BrowserVersions(
        chrome=full_chrome_version(components["chrome"]) if "chrome" in components else None,
        firefox=full_firefox_version(components["ff"]) if "ff" in components else None,
        edge=full_edge_version(components["edge"]) if "edge" in components else None,
    )


def classify_browser_tag(tag: str, category: str = "browsers") -> BrowserVersions:
    """
    Parse a browser tag and require at least one browser.

    A browser folder that names no browser is a config error, not a skip.
    """
    versions = parse_browser_tag(tag)
    if not versions.has_browser():
        raise UnclassifiableBrowserTag(
            f"Cannot find any browsers from image tag \"{tag}\" in {category}/"
        )
    return versions
