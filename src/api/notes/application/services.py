"""Application service for the notes bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from notes.application.observability import DefaultNoteServiceProbe, NoteServiceProbe
from notes.domain import (
    Note,
    NoteId,
    NoteNotFoundError,
    NoteScope,
    NoteUsage,
    QuotaExceededError,
    QuotaGuard,
)
from notes.ports.repositories import INoteRepository
from shared_kernel.errors import UpstreamError
from shared_kernel.plans import TenantPlan


class NoteService:
    """Note use cases, always evaluated within the caller's NoteScope.

    The caller must already hold the matching grant from the access
    decision point.
    """

    def __init__(
        self,
        note_repository: INoteRepository,
        session: AsyncSession,
        quota_guard: QuotaGuard | None = None,
        probe: NoteServiceProbe | None = None,
    ):
        """Initialize NoteService with dependencies.

        Args:
            note_repository: Repository for note persistence
            session: Database session for transaction management
            quota_guard: Plan quota policy (defaults to the standard limits)
            probe: Optional domain probe for observability
        """
        self._note_repository = note_repository
        self._session = session
        self._quota_guard = quota_guard or QuotaGuard()
        self._probe = probe or DefaultNoteServiceProbe()

    def _parse_id(self, scope: NoteScope, note_id: str) -> NoteId:
        # A malformed id cannot match anything; report it like any other miss
        try:
            return NoteId.from_string(note_id)
        except ValueError as e:
            self._probe.note_not_found(note_id=note_id, tenant_id=scope.tenant_id)
            raise NoteNotFoundError() from e

    async def _plan(self, scope: NoteScope, for_update: bool) -> TenantPlan:
        plan = await self._note_repository.lock_tenant_plan(
            scope, for_update=for_update
        )
        if plan is None:
            raise UpstreamError(f"Tenant {scope.tenant_id} has no plan record")
        return plan

    async def list_notes(self, scope: NoteScope) -> list[Note]:
        """List the tenant's notes, most recently updated first."""
        notes = await self._note_repository.list_for_tenant(scope)
        self._probe.notes_listed(tenant_id=scope.tenant_id, count=len(notes))
        return notes

    async def get_note(self, scope: NoteScope, note_id: str) -> Note:
        """Fetch one of the tenant's notes.

        Raises:
            NoteNotFoundError: If no note with this id exists in the tenant
        """
        parsed = self._parse_id(scope, note_id)
        note = await self._note_repository.get(scope, parsed)
        if note is None:
            self._probe.note_not_found(note_id=note_id, tenant_id=scope.tenant_id)
            raise NoteNotFoundError()
        return note

    async def create_note(
        self, scope: NoteScope, title: str | None, content: str | None
    ) -> Note:
        """Create a note, subject to the tenant's plan quota.

        The tenant row is locked before counting, so concurrent creations for
        one tenant serialize and cannot overshoot the limit together.

        Raises:
            InvalidNoteError: If the title is blank
            QuotaExceededError: If the plan's note limit is reached
        """
        note = Note.create(scope, title=title, content=content)

        async with self._session.begin():
            plan = await self._plan(scope, for_update=True)
            count = await self._note_repository.count(scope)
            try:
                self._quota_guard.check(plan, count)
            except QuotaExceededError:
                self._probe.quota_exceeded(
                    tenant_id=scope.tenant_id, plan=plan.value, count=count
                )
                raise
            await self._note_repository.add(note)

        self._probe.note_created(
            note_id=note.id.value, tenant_id=scope.tenant_id, user_id=scope.user_id
        )
        return note

    async def update_note(
        self,
        scope: NoteScope,
        note_id: str,
        title: str | None,
        content: str | None,
    ) -> Note:
        """Edit a note created by the caller.

        Raises:
            NoteNotFoundError: If the caller has no note with this id
            InvalidNoteError: If the new title is blank
        """
        parsed = self._parse_id(scope, note_id)

        async with self._session.begin():
            note = await self._note_repository.get_owned(scope, parsed)
            if note is None:
                self._probe.note_not_found(
                    note_id=note_id, tenant_id=scope.tenant_id
                )
                raise NoteNotFoundError()

            note.edit(title=title, content=content)
            if not await self._note_repository.update(scope, note):
                raise NoteNotFoundError()

        self._probe.note_updated(note_id=note_id, tenant_id=scope.tenant_id)
        return note

    async def delete_note(self, scope: NoteScope, note_id: str) -> None:
        """Delete a note created by the caller.

        Raises:
            NoteNotFoundError: If the caller has no note with this id
        """
        parsed = self._parse_id(scope, note_id)

        async with self._session.begin():
            deleted = await self._note_repository.delete(scope, parsed)

        if not deleted:
            self._probe.note_not_found(note_id=note_id, tenant_id=scope.tenant_id)
            raise NoteNotFoundError()
        self._probe.note_deleted(note_id=note_id, tenant_id=scope.tenant_id)

    async def usage(self, scope: NoteScope) -> NoteUsage:
        """Report the tenant's note count against its plan limit."""
        plan = await self._plan(scope, for_update=False)
        count = await self._note_repository.count(scope)
        return self._quota_guard.usage(plan, count)
