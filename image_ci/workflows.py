"""
Script: image_ci/workflows.py
What: Renders one CircleCI workflow block per image category.
Doing: Filters scanned tags through the skip rules and writes one indented job invocation per remaining tag.
Why: Every image folder needs its own build/test/push job, and YAML indentation must line up with the preamble.
Goal: Produce the `build-*-images` workflow text appended after the preamble.
"""

from __future__ import annotations

from typing import Sequence

from image_ci.browsers import classify_browser_tag
from image_ci.scan import BROWSERS, ImageTag
from image_ci.skip_lists import SkipLists


# Indent is important: workflows sit under `workflows:` in the preamble,
# job steps under `jobs:`, and parameters under the job name.
WORKFLOW_INDENT = "  "
JOBS_INDENT = "    "
STEP_INDENT = "      "
PARAMETER_INDENT = "          "


def workflow_header(workflow_name: str) -> str:
    return f"{WORKFLOW_INDENT}{workflow_name}:\n{JOBS_INDENT}jobs:\n"


def render_job(job_name: str, display_name: str, parameters: Sequence[tuple[str, str]]) -> str:
    """
    Render one job invocation.

    String parameter values are quoted; booleans are passed in already
    rendered (`false`) and written bare.
    """
    lines = [f"{STEP_INDENT}- {job_name}:\n", f'{PARAMETER_INDENT}name: "{display_name}"\n']
    for key, value in parameters:
        lines.append(f"{PARAMETER_INDENT}{key}: {value}\n")
    return "".join(lines)


def quoted(value: str) -> str:
    return f'"{value}"'


def base_job(image: ImageTag, skip_lists: SkipLists) -> str:
    parameters = [("dockerTag", quoted(image.tag))]
    # Custom images whose FROM is not a strict Node version tag.
    if image.tag in skip_lists.base_skip_version_check:
        parameters.append(("checkNodeVersion", "false"))
    return render_job("build-base-image", f"base {image.tag}", parameters)


def browser_job(image: ImageTag, skip_lists: SkipLists) -> str:
    # Classify before the override check so a bad folder name always fails the run.
    versions = classify_browser_tag(image.tag, BROWSERS)
    parameters = [("dockerTag", quoted(image.tag))]
    if image.tag not in skip_lists.browsers_skip_version_check:
        parameters.extend((key, quoted(value)) for key, value in versions.as_parameters())
    return render_job("build-browser-image", f"browsers {image.tag}", parameters)


def included_job(image: ImageTag) -> str:
    return render_job(
        "build-included-image",
        f"included {image.tag}",
        [("dockerTag", quoted(image.tag))],
    )


def form_base_workflow(images: Sequence[ImageTag], skip_lists: SkipLists) -> str:
    jobs = [base_job(image, skip_lists) for image in images if not skip_lists.is_base_skipped(image.tag)]
    return workflow_header("build-base-images") + "".join(jobs)


def form_browser_workflow(images: Sequence[ImageTag], skip_lists: SkipLists) -> str:
    jobs = [
        browser_job(image, skip_lists)
        for image in images
        if not skip_lists.is_browser_skipped(image.tag)
    ]
    return workflow_header("build-browser-images") + "".join(jobs)


def form_included_workflow(images: Sequence[ImageTag], skip_lists: SkipLists) -> str:
    jobs = [
        included_job(image)
        for image in images
        if not skip_lists.is_included_skipped(image.tag)
    ]
    return workflow_header("build-included-images") + "".join(jobs)


def skipped_tags(category: str, images: Sequence[ImageTag], skip_lists: SkipLists) -> list[str]:
    """Return tags the skip rule for `category` drops, for operator reports."""
    return [image.tag for image in images if skip_lists.is_skipped(category, image.tag)]

