"""
Script: image_ci/common.py
What: Shared helper functions and error types used by all `image_ci` modules.
Doing: Wraps env reads, error classes, and the single output write.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all generator modules.
"""

from __future__ import annotations

import os
from pathlib import Path


class ImageCiError(RuntimeError):
    """Raised when config generation hits a known error condition."""


class UnclassifiableBrowserTag(ImageCiError):
    """Raised when a browser image tag names no recognizable browser."""


class InvalidSemanticVersion(ImageCiError):
    """Raised when a tag that must be a semantic version cannot be parsed."""


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def resolve_path(value: str, root: Path) -> Path:
    """Return `value` as a path, anchored at `root` unless already absolute."""
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path


def write_text_once(file_path: Path, text: str) -> None:
    """
    Replace the whole file with `text` in one step.

    The text goes to a temporary file in the same folder first and is then
    moved over `file_path`, so a failed write leaves the previous file as it was.
    `newline=""` keeps line terminators exactly as they appear in `text`,
    so `os.linesep` separators are not translated a second time on Windows.
    """
    temp_path = file_path.with_name(f".{file_path.name}.{os.getpid()}.tmp")
    try:
        with open(temp_path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(temp_path, file_path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise ImageCiError(f"Could not write {file_path}: {exc.strerror or exc}") from exc
