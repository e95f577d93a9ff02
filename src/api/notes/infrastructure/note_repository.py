"""PostgreSQL implementation of INoteRepository.

Tenant isolation lives here: every statement carries the scope's tenant
predicate, and mutating statements carry the creator predicate as well.
"""

from __future__ import annotations

from sqlalchemy import column, delete, func, select, table, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes.domain import Note, NoteId, NoteScope
from notes.infrastructure.models import NoteModel
from notes.ports.repositories import INoteRepository
from shared_kernel.plans import TenantPlan

# Only the columns the quota check needs; the tenants table itself is owned
# by the iam context.
_tenants = table("tenants", column("id"), column("plan"))


def note_from_model(model: NoteModel) -> Note:
    """Reconstitute a Note aggregate from its ORM row."""
    return Note(
        id=NoteId(value=model.id),
        tenant_id=model.tenant_id,
        user_id=model.user_id,
        title=model.title,
        content=model.content,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class NoteRepository(INoteRepository):
    """Repository managing PostgreSQL storage for Note aggregates."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _in_tenant(scope: NoteScope):
        return NoteModel.tenant_id == scope.tenant_id

    @staticmethod
    def _owned(scope: NoteScope, note_id: NoteId):
        return (
            NoteModel.id == note_id.value,
            NoteModel.tenant_id == scope.tenant_id,
            NoteModel.user_id == scope.user_id,
        )

    async def list_for_tenant(self, scope: NoteScope) -> list[Note]:
        stmt = (
            select(NoteModel)
            .where(self._in_tenant(scope))
            .order_by(NoteModel.updated_at.desc(), NoteModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [note_from_model(model) for model in result.scalars().all()]

    async def get(self, scope: NoteScope, note_id: NoteId) -> Note | None:
        stmt = select(NoteModel).where(
            NoteModel.id == note_id.value, self._in_tenant(scope)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return note_from_model(model) if model else None

    async def get_owned(self, scope: NoteScope, note_id: NoteId) -> Note | None:
        stmt = select(NoteModel).where(*self._owned(scope, note_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return note_from_model(model) if model else None

    async def count(self, scope: NoteScope) -> int:
        stmt = select(func.count()).select_from(NoteModel).where(self._in_tenant(scope))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def lock_tenant_plan(
        self, scope: NoteScope, for_update: bool = True
    ) -> TenantPlan | None:
        stmt = select(_tenants.c.plan).where(_tenants.c.id == scope.tenant_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        plan = result.scalar_one_or_none()
        return TenantPlan(plan) if plan is not None else None

    async def add(self, note: Note) -> None:
        self._session.add(
            NoteModel(
                id=note.id.value,
                tenant_id=note.tenant_id,
                user_id=note.user_id,
                title=note.title,
                content=note.content,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
        )
        await self._session.flush()

    async def update(self, scope: NoteScope, note: Note) -> bool:
        stmt = (
            update(NoteModel)
            .where(*self._owned(scope, note.id))
            .values(
                title=note.title,
                content=note.content,
                updated_at=note.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, scope: NoteScope, note_id: NoteId) -> bool:
        stmt = (
            delete(NoteModel)
            .where(*self._owned(scope, note_id))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
