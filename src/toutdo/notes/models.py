"""Data model for notes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(slots=True)
class Note:
    id: int
    content: str
    pinned: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "content": self.content, "pinned": self.pinned}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Note":
        """Build a note from a persisted record, rejecting anything of the wrong shape."""
        if not isinstance(data, Mapping):
            raise ValueError(f"note record must be an object, got {type(data).__name__}")
        note_id = data.get("id")
        # bool is an int subclass; it is not a valid id
        if isinstance(note_id, bool) or not isinstance(note_id, int) or note_id < 0:
            raise ValueError(f"invalid note id: {note_id!r}")
        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError(f"note {note_id} has non-text content")
        pinned = data.get("pinned", False)
        if not isinstance(pinned, bool):
            raise ValueError(f"note {note_id} has non-boolean pinned flag")
        return cls(id=note_id, content=content, pinned=pinned)

    def copy(self) -> "Note":
        return Note(id=self.id, content=self.content, pinned=self.pinned)
