"""Pydantic request and response models for note routes."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from notes.domain import Note, NoteUsage


class CreateNoteRequest(BaseModel):
    """Request model for creating a note.

    The title is validated by the Note aggregate, so a missing or blank
    title reports the same message as any other entry point.
    """

    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note body")


class UpdateNoteRequest(BaseModel):
    """Request model for replacing a note's title and content."""

    title: str | None = Field(default=None, description="New note title")
    content: str | None = Field(default=None, description="New note body")


class NoteResponse(BaseModel):
    """Response model for a note."""

    id: str
    tenant_id: str
    user_id: str = Field(..., description="Identity of the note's creator")
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, note: Note) -> NoteResponse:
        """Convert domain Note aggregate to API response."""
        return cls(
            id=note.id.value,
            tenant_id=note.tenant_id,
            user_id=note.user_id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteUsageResponse(BaseModel):
    """The tenant's note count against its plan limit."""

    count: int
    limit: int | None = Field(..., description="Null when the plan is unlimited")

    @classmethod
    def from_domain(cls, usage: NoteUsage) -> NoteUsageResponse:
        return cls(count=usage.count, limit=usage.limit)


class DeleteNoteResponse(BaseModel):
    success: bool = True
