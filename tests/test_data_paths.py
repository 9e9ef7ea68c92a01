from __future__ import annotations

import importlib
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


class DataPathsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.prev_data = os.environ.get("XDG_DATA_HOME")
        os.environ["XDG_DATA_HOME"] = self.tmpdir.name
        sys.modules.pop("toutdo.data_paths", None)
        self.data_paths = importlib.import_module("toutdo.data_paths")
        if self.data_paths.GLib is not None:
            # GLib caches the data dir on first use, so the override is not honoured
            self.data_paths.GLib = None

    def tearDown(self) -> None:
        if self.prev_data is None:
            os.environ.pop("XDG_DATA_HOME", None)
        else:
            os.environ["XDG_DATA_HOME"] = self.prev_data

    def test_notes_file_lives_in_data_dir(self) -> None:
        expected = Path(self.tmpdir.name) / "toutdo" / "notes.json"
        self.assertEqual(self.data_paths.notes_path(), expected)
        self.assertFalse(expected.parent.exists())

    def test_override_path(self) -> None:
        override = os.path.join(self.tmpdir.name, "elsewhere.json")
        self.assertEqual(self.data_paths.notes_path(override), Path(override))

    def test_log_dir_is_created(self) -> None:
        path = self.data_paths.log_dir()
        self.assertTrue(path.is_dir())
        self.assertEqual(path, Path(self.tmpdir.name) / "toutdo" / "logs")


if __name__ == "__main__":
    unittest.main()
