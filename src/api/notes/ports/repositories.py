"""Repository protocols (ports) for the notes bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from notes.domain import Note, NoteId, NoteScope
from shared_kernel.plans import TenantPlan


@runtime_checkable
class INoteRepository(Protocol):
    """Repository for Note persistence.

    Every method takes the caller's NoteScope and must constrain its query
    by the scope's tenant; ``get_owned``, ``update`` and ``delete`` must also
    constrain by the scope's user. A scope that excludes every row yields
    None/False, never an error.
    """

    async def list_for_tenant(self, scope: NoteScope) -> list[Note]:
        """List the tenant's notes, most recently updated first."""
        ...

    async def get(self, scope: NoteScope, note_id: NoteId) -> Note | None:
        """Fetch one of the tenant's notes."""
        ...

    async def get_owned(self, scope: NoteScope, note_id: NoteId) -> Note | None:
        """Fetch one of the tenant's notes created by the scope's user."""
        ...

    async def count(self, scope: NoteScope) -> int:
        """Count the tenant's notes."""
        ...

    async def lock_tenant_plan(
        self, scope: NoteScope, for_update: bool = True
    ) -> TenantPlan | None:
        """Read the tenant's plan, locking the tenant row when asked.

        Holding the lock for the rest of the transaction serializes
        concurrent quota checks for the same tenant.
        """
        ...

    async def add(self, note: Note) -> None:
        """Insert a new note."""
        ...

    async def update(self, scope: NoteScope, note: Note) -> bool:
        """Persist title, content and updated_at of an owned note.

        Returns:
            False if no owned note matched
        """
        ...

    async def delete(self, scope: NoteScope, note_id: NoteId) -> bool:
        """Delete an owned note.

        Returns:
            False if no owned note matched
        """
        ...
