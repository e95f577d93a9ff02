"""Exceptions raised by the notes domain."""

from shared_kernel.errors import Forbidden, NotFound, ValidationError


class NoteNotFoundError(NotFound):
    """No note matched within the caller's scope.

    Raised identically for missing notes and notes owned by another tenant
    or user, so existence never leaks.
    """

    def __init__(self, message: str = "Note not found"):
        super().__init__(message)


class InvalidNoteError(ValidationError):
    """A note's title or content is unacceptable."""

    pass


class QuotaExceededError(Forbidden):
    """The tenant's plan does not allow another note."""

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit
