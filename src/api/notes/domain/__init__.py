"""Domain layer for the notes bounded context."""

from notes.domain.exceptions import (
    InvalidNoteError,
    NoteNotFoundError,
    QuotaExceededError,
)
from notes.domain.note import Note
from notes.domain.quota import PLAN_NOTE_LIMITS, NoteUsage, QuotaGuard
from notes.domain.value_objects import NoteId, NoteScope

__all__ = [
    "InvalidNoteError",
    "Note",
    "NoteId",
    "NoteNotFoundError",
    "NoteScope",
    "NoteUsage",
    "PLAN_NOTE_LIMITS",
    "QuotaExceededError",
    "QuotaGuard",
]
