"""
Script: image_ci/show_images.py
What: Prints the scanned image folders and what the skip rules drop.
Doing: Runs the same scan and skip checks as config generation, without writing anything.
Why: Lets operators see why a folder does or does not get a job before regenerating `circle.yml`.
Goal: Give a quick, read-only view of the generator inputs.
"""

from __future__ import annotations

from image_ci.generate_config import resolve_settings
from image_ci.scan import CATEGORIES, print_images, scan_all
from image_ci.skip_lists import load_skip_lists
from image_ci.workflows import skipped_tags


def main() -> None:
    root, _config_path, skip_file = resolve_settings()
    skip_lists = load_skip_lists(skip_file)
    images = scan_all(root)

    for category in CATEGORIES:
        print_images(f"{category} images", images[category])
        skipped = skipped_tags(category, images[category], skip_lists)
        print(f"skipped in {category}: {' '.join(skipped) if skipped else '(none)'}")


if __name__ == "__main__":
    main()
