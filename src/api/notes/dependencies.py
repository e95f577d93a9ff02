"""FastAPI dependencies for the notes bounded context.

The caller's NoteScope is derived from the access-checked membership; this
module is the only place the notes context reaches into iam.
"""

from typing import Annotated, Awaitable, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.value_objects import Membership, Operation
from iam.dependencies.access import require
from infrastructure.database.dependencies import get_write_session
from notes.application import DefaultNoteServiceProbe, NoteService, NoteServiceProbe
from notes.domain import NoteScope, QuotaGuard
from notes.infrastructure import NoteRepository


def get_note_service_probe() -> NoteServiceProbe:
    """Get NoteServiceProbe instance."""
    return DefaultNoteServiceProbe()


def get_quota_guard() -> QuotaGuard:
    """Get the plan quota policy."""
    return QuotaGuard()


def get_note_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> NoteRepository:
    """Get NoteRepository bound to the write session."""
    return NoteRepository(session=session)


def get_note_service(
    note_repository: Annotated[NoteRepository, Depends(get_note_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    quota_guard: Annotated[QuotaGuard, Depends(get_quota_guard)],
    probe: Annotated[NoteServiceProbe, Depends(get_note_service_probe)],
) -> NoteService:
    """Get NoteService instance.

    The repository shares the session via FastAPI dependency caching.
    """
    return NoteService(
        note_repository=note_repository,
        session=session,
        quota_guard=quota_guard,
        probe=probe,
    )


def note_scope(operation: Operation) -> Callable[..., Awaitable[NoteScope]]:
    """Build a dependency granting ``operation`` and returning the caller's scope."""

    async def dependency(
        membership: Annotated[Membership, Depends(require(operation))],
    ) -> NoteScope:
        return NoteScope(
            tenant_id=membership.tenant_id.value,
            user_id=membership.user_id.value,
        )

    dependency.__name__ = f"note_scope_{operation.value}"
    return dependency
