"""Notes subsystem for Tout-Do."""

from .models import Note
from .storage import NoteFile
from .store import NoteStore

__all__ = ["Note", "NoteFile", "NoteStore"]
