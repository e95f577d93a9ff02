"""Unit tests for NoteRepository.

Tenant isolation depends entirely on the predicates each statement carries,
so these tests compile the issued SQL and inspect its WHERE clause.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from notes.domain import Note, NoteId, NoteScope
from notes.infrastructure import NoteModel, NoteRepository
from shared_kernel.plans import TenantPlan

TENANT = "01JA0000000000000000000000"


@pytest.fixture
def scope() -> NoteScope:
    return NoteScope(tenant_id=TENANT, user_id="user-1")


@pytest.fixture
def session():
    session = Mock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    return session


@pytest.fixture
def repository(session):
    return NoteRepository(session=session)


def issued_sql(session) -> str:
    stmt = session.execute.await_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


def issued_params(session) -> dict:
    stmt = session.execute.await_args.args[0]
    return stmt.compile(dialect=postgresql.dialect()).params


def note_model(**overrides) -> NoteModel:
    now = datetime.now(timezone.utc)
    values = dict(
        id=NoteId.generate().value,
        tenant_id=TENANT,
        user_id="user-1",
        title="Groceries",
        content="milk",
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return NoteModel(**values)


class TestReadQueries:
    """Every read is confined to the scope's tenant."""

    @pytest.mark.asyncio
    async def test_list_filters_by_tenant_and_orders_by_recency(
        self, repository, session, scope
    ):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [note_model()]
        session.execute.return_value = result

        notes = await repository.list_for_tenant(scope)

        sql = issued_sql(session)
        assert "notes.tenant_id = " in sql
        assert "ORDER BY notes.updated_at DESC" in sql
        assert TENANT in issued_params(session).values()
        assert notes[0].title == "Groceries"

    @pytest.mark.asyncio
    async def test_get_filters_by_id_and_tenant(self, repository, session, scope):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        assert await repository.get(scope, NoteId.generate()) is None

        sql = issued_sql(session)
        assert "notes.id = " in sql
        assert "notes.tenant_id = " in sql
        assert "notes.user_id" not in sql.split("WHERE", 1)[1]

    @pytest.mark.asyncio
    async def test_get_owned_also_filters_by_creator(
        self, repository, session, scope
    ):
        result = MagicMock()
        result.scalar_one_or_none.return_value = note_model()
        session.execute.return_value = result

        note = await repository.get_owned(scope, NoteId.generate())

        assert isinstance(note, Note)
        where = issued_sql(session).split("WHERE", 1)[1]
        assert "notes.tenant_id = " in where
        assert "notes.user_id = " in where
        assert "user-1" in issued_params(session).values()

    @pytest.mark.asyncio
    async def test_count_filters_by_tenant(self, repository, session, scope):
        result = MagicMock()
        result.scalar_one.return_value = 2
        session.execute.return_value = result

        assert await repository.count(scope) == 2
        assert "notes.tenant_id = " in issued_sql(session)


class TestTenantPlanLock:
    @pytest.mark.asyncio
    async def test_locks_tenant_row(self, repository, session, scope):
        result = MagicMock()
        result.scalar_one_or_none.return_value = "pro"
        session.execute.return_value = result

        plan = await repository.lock_tenant_plan(scope)

        assert plan == TenantPlan.PRO
        sql = issued_sql(session)
        assert "FROM tenants" in sql
        assert "FOR UPDATE" in sql

    @pytest.mark.asyncio
    async def test_plain_read_without_lock(self, repository, session, scope):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        assert await repository.lock_tenant_plan(scope, for_update=False) is None
        assert "FOR UPDATE" not in issued_sql(session)


class TestMutations:
    """Updates and deletes are confined to the scope's tenant and creator."""

    @pytest.mark.asyncio
    async def test_add_persists_all_fields(self, repository, session, scope):
        note = Note.create(scope, title="Groceries", content="milk")

        await repository.add(note)

        model = session.add.call_args.args[0]
        assert model.id == note.id.value
        assert model.tenant_id == TENANT
        assert model.user_id == "user-1"
        assert model.updated_at == note.updated_at
        session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
    async def test_update_scoped_to_owner(
        self, repository, session, scope, rowcount, expected
    ):
        session.execute.return_value = MagicMock(rowcount=rowcount)
        note = Note.create(scope, title="Groceries", content="milk")

        assert await repository.update(scope, note) is expected

        sql = issued_sql(session)
        assert sql.startswith("UPDATE notes SET")
        where = sql.split("WHERE", 1)[1]
        assert "notes.tenant_id = " in where
        assert "notes.user_id = " in where

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
    async def test_delete_scoped_to_owner(
        self, repository, session, scope, rowcount, expected
    ):
        session.execute.return_value = MagicMock(rowcount=rowcount)

        assert await repository.delete(scope, NoteId.generate()) is expected

        sql = issued_sql(session)
        assert sql.startswith("DELETE FROM notes")
        assert "notes.tenant_id = " in sql
        assert "notes.user_id = " in sql
