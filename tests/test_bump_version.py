from __future__ import annotations

import importlib.util
import re
import tempfile
import unittest
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "bump_version.py"


def load_script():
    spec = importlib.util.spec_from_file_location("bump_version", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class BumpVersionTest(unittest.TestCase):
    def setUp(self) -> None:
        self.module = load_script()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        root = Path(self.tmpdir.name)
        self.pyproject = root / "pyproject.toml"
        self.pyproject.write_text('[project]\nname = "toutdo"\nversion = "0.3.1"\n', encoding="utf-8")
        self.config = root / "config.py"
        self.config.write_text('APP_NAME = "Tout-Do"\nAPP_VERSION = "0.3.1"\n', encoding="utf-8")
        self.module.PROJECT_ROOT = root
        self.module.TARGETS = [
            (self.pyproject, self.module.TARGETS[0][1], self.module.TARGETS[0][2]),
            (self.config, self.module.TARGETS[1][1], self.module.TARGETS[1][2]),
        ]

    def test_updates_both_files(self) -> None:
        self.assertEqual(self.module.main(["bump_version.py", "1.0.0"]), 0)
        self.assertIn('version = "1.0.0"', self.pyproject.read_text(encoding="utf-8"))
        self.assertTrue(re.search(r'^APP_VERSION = "1.0.0"$', self.config.read_text(encoding="utf-8"), re.M))

    def test_nothing_written_when_a_file_lacks_version_line(self) -> None:
        self.config.write_text('APP_NAME = "Tout-Do"\n', encoding="utf-8")
        self.assertEqual(self.module.main(["bump_version.py", "1.0.0"]), 1)
        self.assertIn('version = "0.3.1"', self.pyproject.read_text(encoding="utf-8"))
        self.assertEqual(self.config.read_text(encoding="utf-8"), 'APP_NAME = "Tout-Do"\n')

    def test_requires_version_argument(self) -> None:
        self.assertEqual(self.module.main(["bump_version.py"]), 1)
        self.assertIn('version = "0.3.1"', self.pyproject.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
