#!/usr/bin/env python3
"""Set the release version in pyproject.toml and the runtime config."""

from __future__ import annotations

import re
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

TARGETS = [
    (PROJECT_ROOT / "pyproject.toml", re.compile(r'^version\s*=\s*"[0-9A-Za-z.\-+]+"$', re.M), 'version = "{version}"'),
    (
        PROJECT_ROOT / "src" / "toutdo" / "config.py",
        re.compile(r'^APP_VERSION\s*=\s*"[0-9A-Za-z.\-+]+"$', re.M),
        'APP_VERSION = "{version}"',
    ),
]


def bump(version: str) -> int:
    # every file must match before any is written, so the versions never diverge
    updates = []
    for path, pattern, replacement in TARGETS:
        text = path.read_text(encoding="utf-8")
        updated, count = pattern.subn(replacement.format(version=version), text, count=1)
        if count == 0:
            print(f"No version line found in {path.relative_to(PROJECT_ROOT)}", file=sys.stderr)
            return 1
        updates.append((path, updated))
    for path, updated in updates:
        path.write_text(updated, encoding="utf-8")
        print(f"Updated version in {path.relative_to(PROJECT_ROOT)}")
    return 0


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print("Usage: bump_version.py <new-version>", file=sys.stderr)
        return 1
    return bump(argv[1])


if __name__ == "__main__":
    sys.exit(main(sys.argv))
