from __future__ import annotations

import contextlib
import io
import json
import os
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from image_ci.show_images import main


class ShowImagesTests(unittest.TestCase):
    def test_reports_skipped_tags_without_writing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for folder in ("base/8.0.0", "base/14.15.0", "included/5.4.0", "included/6.0.0"):
                (root / folder).mkdir(parents=True)
            skip_file = root / "skip.json"
            skip_file.write_text(
                json.dumps({"base": {"skip": ["8.0.0"]}, "included": {"min_version": "6.0.0"}}),
                encoding="utf-8",
            )

            output = io.StringIO()
            env = {"IMAGES_ROOT": str(root), "SKIP_IMAGES_FILE": str(skip_file)}
            with mock.patch.dict(os.environ, env), contextlib.redirect_stdout(output):
                main()

            self.assertIn("skipped in base: 8.0.0\n", output.getvalue())
            self.assertIn("skipped in browsers: (none)\n", output.getvalue())
            self.assertIn("skipped in included: 5.4.0\n", output.getvalue())
            self.assertFalse((root / "circle.yml").exists())


if __name__ == "__main__":
    unittest.main()
