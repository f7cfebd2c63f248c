"""
Script: tests/test_browsers.py
What: Tests browser version parsing in `image_ci/browsers.py`.
Doing: Checks Chrome/Firefox/Edge label extraction and the failure for tags with no browser.
Why: A wrong label makes the generated job check for the wrong browser version.
Goal: Keep browser tag parsing stable as new folder names appear.
"""

from __future__ import annotations

import unittest

from image_ci.browsers import (
    BrowserVersions,
    classify_browser_tag,
    find_chrome_version,
    find_edge_version,
    find_firefox_version,
    parse_browser_tag,
)
from image_ci.common import ImageCiError, UnclassifiableBrowserTag


class FindVersionTests(unittest.TestCase):
    def test_finds_chrome_version(self) -> None:
        self.assertEqual(find_chrome_version("node12.4.0-chrome76"), "Google Chrome 76")

    def test_finds_firefox_version(self) -> None:
        self.assertEqual(find_firefox_version("node10.16.3-chrome80-ff73"), "Mozilla Firefox 73")

    def test_finds_edge_version(self) -> None:
        self.assertEqual(find_edge_version("node14.10.1-edge88"), "Microsoft Edge 88")

    def test_chrome_may_lead_the_tag(self) -> None:
        self.assertEqual(find_chrome_version("chrome67-ff57"), "Google Chrome 67")
        self.assertEqual(find_firefox_version("chrome67-ff57"), "Mozilla Firefox 57")

    def test_firefox_and_edge_need_a_leading_component(self) -> None:
        self.assertIsNone(find_firefox_version("ff57"))
        self.assertIsNone(find_edge_version("edge88"))

    def test_returns_none_when_browser_missing(self) -> None:
        self.assertIsNone(find_firefox_version("node12.4.0-chrome76"))
        self.assertIsNone(find_edge_version("node12.4.0-chrome76"))

    def test_ignores_suffix_after_version_digits(self) -> None:
        self.assertEqual(find_firefox_version("node12.18.3-chrome85-ff78esr"), "Mozilla Firefox 78")

    def test_ignores_other_components(self) -> None:
        versions = parse_browser_tag("node12.13.0-chrome78-ff70-brave78")
        self.assertEqual(
            versions,
            BrowserVersions(chrome="Google Chrome 78", firefox="Mozilla Firefox 70"),
        )


class ClassifyBrowserTagTests(unittest.TestCase):
    def test_all_three_browsers(self) -> None:
        versions = classify_browser_tag("node14.15.0-chrome86-ff82-edge88")
        self.assertEqual(
            versions.as_parameters(),
            [
                ("chromeVersion", "Google Chrome 86"),
                ("firefoxVersion", "Mozilla Firefox 82"),
                ("edgeVersion", "Microsoft Edge 88"),
            ],
        )

    def test_rejects_tag_without_browser(self) -> None:
        with self.assertRaises(UnclassifiableBrowserTag) as context:
            classify_browser_tag("node12.4.0")
        self.assertIn("node12.4.0", str(context.exception))
        self.assertIn("browsers", str(context.exception))

    def test_unclassifiable_is_a_tool_error(self) -> None:
        self.assertTrue(issubclass(UnclassifiableBrowserTag, ImageCiError))


if __name__ == "__main__":
    unittest.main()
