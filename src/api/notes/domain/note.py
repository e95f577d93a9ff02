"""Note aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from notes.domain.exceptions import InvalidNoteError
from notes.domain.value_objects import NoteId, NoteScope

MAX_TITLE_LENGTH = 255


def _normalize_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise InvalidNoteError("Title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidNoteError(
            f"Title must be at most {MAX_TITLE_LENGTH} characters"
        )
    return title


@dataclass
class Note:
    """A note owned jointly by its tenant and its creator.

    The tenant is the isolation boundary; the creator is the only one who
    may change or delete it. Notes never move between tenants.
    """

    id: NoteId
    tenant_id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, scope: NoteScope, title: str | None, content: str | None) -> Note:
        """Create a note owned by the scope's tenant and user.

        Raises:
            InvalidNoteError: If the title is blank or too long
        """
        now = datetime.now(UTC)
        return cls(
            id=NoteId.generate(),
            tenant_id=scope.tenant_id,
            user_id=scope.user_id,
            title=_normalize_title(title),
            content=content or "",
            created_at=now,
            updated_at=now,
        )

    def edit(self, title: str | None, content: str | None) -> None:
        """Replace title and content and bump ``updated_at``.

        Raises:
            InvalidNoteError: If the title is blank or too long
        """
        self.title = _normalize_title(title)
        self.content = content or ""
        self.updated_at = datetime.now(UTC)
