"""
Script: tests/test_common.py
What: Tests shared helpers in `image_ci/common.py`.
Doing: Checks path resolution and that the config write replaces the file in one step.
Why: A half-written `circle.yml` would break every CI run until regenerated.
Goal: Keep the output write all-or-nothing.
"""

from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
from unittest import mock

from image_ci.common import ImageCiError, resolve_path, write_text_once


class ResolvePathTests(unittest.TestCase):
    def test_relative_path_is_anchored_at_root(self) -> None:
        self.assertEqual(resolve_path("circle.yml", Path("/repo")), Path("/repo/circle.yml"))

    def test_absolute_path_is_kept(self) -> None:
        self.assertEqual(resolve_path("/tmp/circle.yml", Path("/repo")), Path("/tmp/circle.yml"))


class WriteTextOnceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.folder = Path(self._tmp.name)
        self.config_path = self.folder / "circle.yml"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_replaces_content_without_leftovers(self) -> None:
        self.config_path.write_text("old content\n", encoding="utf-8")

        write_text_once(self.config_path, "version: 2.1\n")

        self.assertEqual(self.config_path.read_text(encoding="utf-8"), "version: 2.1\n")
        self.assertEqual([path.name for path in self.folder.iterdir()], ["circle.yml"])

    def test_keeps_line_terminators_verbatim(self) -> None:
        write_text_once(self.config_path, "a\r\nb\n")
        self.assertEqual(self.config_path.read_bytes(), b"a\r\nb\n")

    def test_failed_write_leaves_previous_file(self) -> None:
        self.config_path.write_text("old content\n", encoding="utf-8")

        with mock.patch("image_ci.common.os.replace", side_effect=OSError(28, "No space left on device")):
            with self.assertRaises(ImageCiError) as context:
                write_text_once(self.config_path, "version: 2.1\n")

        self.assertIn("No space left on device", str(context.exception))
        self.assertEqual(self.config_path.read_text(encoding="utf-8"), "old content\n")
        self.assertEqual([path.name for path in self.folder.iterdir()], ["circle.yml"])


if __name__ == "__main__":
    unittest.main()
