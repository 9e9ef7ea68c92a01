"""Whole-file JSON persistence for the note collection."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .. import config
from ..data_paths import notes_path
from ..logger import configure_logging
from .models import Note

_LOG = configure_logging()


class NoteFile:
    """Reads and writes every note as a single JSON array."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else notes_path(config.NOTES_FILE)

    def load(self) -> List[Note]:
        """Return the persisted notes, or an empty list if the file is missing or unusable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            _LOG.info("No notes file at %s; starting empty", self.path)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            _LOG.warning("Could not read notes from %s: %s", self.path, exc)
            return []

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            _LOG.warning("Notes file %s is not valid JSON (%s); starting empty", self.path, exc)
            return []
        if not isinstance(payload, list):
            _LOG.warning("Notes file %s does not hold a list; starting empty", self.path)
            return []

        try:
            notes = [Note.from_dict(entry) for entry in payload]
        except ValueError as exc:
            _LOG.warning("Notes file %s has a malformed record (%s); starting empty", self.path, exc)
            return []

        unique: List[Note] = []
        seen: Set[int] = set()
        for note in notes:
            if note.id in seen:
                _LOG.warning("Dropping duplicate note id %s from %s", note.id, self.path)
                continue
            seen.add(note.id)
            unique.append(note)
        _LOG.info("Loaded %s notes from %s", len(unique), self.path)
        return unique

    def save(self, notes: Iterable[Note]) -> None:
        """Replace the file contents with ``notes``.

        The document is written to a sibling temporary file and moved into place,
        so a failed write never truncates the previous copy. Raises ``OSError``.
        """
        # ASCII escapes keep lone surrogates in content encodable
        payload = json.dumps([note.to_dict() for note in notes], ensure_ascii=True)
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        mode = self._file_mode()
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        _LOG.debug("Wrote notes to %s", self.path)

    def _file_mode(self) -> int:
        """Mode for the written file: the current file's, else 0666 minus the umask."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


__all__ = ["NoteFile"]
