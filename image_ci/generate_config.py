"""
Script: image_ci/generate_config.py
What: Generates `circle.yml` from the `base/`, `browsers/`, and `included/` image folders.
Doing: Scans the folders, prints what it found, builds the whole config in memory, then writes it once.
Why: Adding an image folder should be enough to get a build job; nobody edits the YAML by hand.
Goal: Keep `circle.yml` in sync with the image folders.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from image_ci.common import optional_env, resolve_path, write_text_once
from image_ci.preamble import render_preamble
from image_ci.scan import BASE, BROWSERS, INCLUDED, ImageTag, print_images, scan_all
from image_ci.skip_lists import DEFAULT_SKIP_FILE, SkipLists, load_skip_lists
from image_ci.workflows import form_base_workflow, form_browser_workflow, form_included_workflow


GENERATOR_NAME = Path(__file__).name
DEFAULT_CONFIG_PATH = "circle.yml"


def build_config_text(
    base_images: Sequence[ImageTag],
    browser_images: Sequence[ImageTag],
    included_images: Sequence[ImageTag],
    skip_lists: SkipLists,
    *,
    generator: str = GENERATOR_NAME,
) -> str:
    """Return the full config text; raises before anything is written."""
    base = form_base_workflow(base_images, skip_lists)
    browsers = form_browser_workflow(browser_images, skip_lists)
    included = form_included_workflow(included_images, skip_lists)
    return render_preamble(generator) + os.linesep + base + os.linesep + browsers + os.linesep + included


def resolve_settings() -> tuple[Path, Path, Path]:
    """Return images root, output path, and skip file from the environment."""
    root = Path(optional_env("IMAGES_ROOT", "."))
    config_path = resolve_path(optional_env("CIRCLE_CONFIG_PATH", DEFAULT_CONFIG_PATH), root)
    skip_value = optional_env("SKIP_IMAGES_FILE")
    skip_file = Path(skip_value) if skip_value else DEFAULT_SKIP_FILE
    return root, config_path, skip_file


def generate_config(root: Path, config_path: Path, skip_file: Path) -> str:
    skip_lists = load_skip_lists(skip_file)

    # All three scans finish before any job is rendered.
    images = scan_all(root)
    print_images("base images", images[BASE])
    print_images("browser images", images[BROWSERS])
    print_images("included images", images[INCLUDED])

    text = build_config_text(images[BASE], images[BROWSERS], images[INCLUDED], skip_lists)
    write_text_once(config_path, text)
    print(f"generated {config_path}")
    return text


def main() -> None:
    root, config_path, skip_file = resolve_settings()
    generate_config(root, config_path, skip_file)


if __name__ == "__main__":
    main()
