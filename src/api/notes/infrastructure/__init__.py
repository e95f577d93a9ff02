"""Infrastructure layer for the notes bounded context."""

from notes.infrastructure.models import NoteModel
from notes.infrastructure.note_repository import NoteRepository

__all__ = ["NoteModel", "NoteRepository"]
