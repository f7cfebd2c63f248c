"""
Script: image_ci/scan.py
What: Finds the Docker image folders that drive job generation.
Doing: Lists immediate subfolders of `base/`, `browsers/`, and `included/` and turns each into an `ImageTag`.
Why: The folder name is the image tag, so the filesystem is the source of truth for which jobs exist.
Goal: Return a deterministic list of image tags per category.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath


BASE = "base"
BROWSERS = "browsers"
INCLUDED = "included"
CATEGORIES = (BASE, BROWSERS, INCLUDED)


@dataclass(frozen=True)
class ImageTag:
    # `name` is the image family folder (for example `base`),
    # `tag` is the subfolder (for example `12.18.3`).
    name: str
    tag: str


def split_image_folder_name(folder_name: str) -> ImageTag:
    """Split a `category/tag` folder string into an `ImageTag`."""
    parts = PurePosixPath(folder_name).parts
    if len(parts) != 2:
        raise ValueError(f"Expected folder like 'base/12.0.0', got {folder_name!r}")
    name, tag = parts
    return ImageTag(name=name, tag=tag)


def scan_image_folders(root: Path, category: str) -> list[ImageTag]:
    """
    Return one `ImageTag` per immediate subfolder of `root/category`.

    A missing category folder gives an empty list. Hidden folders and plain
    files are ignored.
    """
    category_dir = root / category
    if not category_dir.is_dir():
        return []

    tags = sorted(
        entry.name
        for entry in category_dir.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )
    # Folder names are used verbatim as tags, backslashes included.
    return [ImageTag(name=category, tag=tag) for tag in tags]


def scan_all(root: Path) -> dict[str, list[ImageTag]]:
    """Scan all three categories before any job is emitted."""
    return {category: scan_image_folders(root, category) for category in CATEGORIES}


def print_images(title: str, images: list[ImageTag]) -> None:
    """Print one scanned collection so operators can see what was found."""
    print(f" *** {title} ***")
    if not images:
        print("(none)")
    for image in images:
        print(f"{image.name}/{image.tag}")
