"""Application layer for the notes bounded context."""

from notes.application.observability import DefaultNoteServiceProbe, NoteServiceProbe
from notes.application.services import NoteService

__all__ = ["DefaultNoteServiceProbe", "NoteService", "NoteServiceProbe"]
