"""Unit tests for NoteService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from notes.application import NoteService, NoteServiceProbe
from notes.domain import (
    InvalidNoteError,
    Note,
    NoteId,
    NoteNotFoundError,
    NoteScope,
    QuotaExceededError,
)
from notes.ports import INoteRepository
from shared_kernel.errors import UpstreamError
from shared_kernel.plans import TenantPlan

TENANT = "01JA0000000000000000000000"


@pytest.fixture
def scope() -> NoteScope:
    return NoteScope(tenant_id=TENANT, user_id="user-1")


@pytest.fixture
def note_repo():
    repo = create_autospec(INoteRepository, instance=True)
    repo.lock_tenant_plan = AsyncMock(return_value=TenantPlan.FREE)
    repo.count = AsyncMock(return_value=0)
    repo.add = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def probe():
    return MagicMock(spec=NoteServiceProbe)


@pytest.fixture
def service(note_repo, mock_session, probe):
    return NoteService(note_repository=note_repo, session=mock_session, probe=probe)


class TestCreateNote:
    """Tests for NoteService.create_note()."""

    @pytest.mark.asyncio
    async def test_creates_within_quota(self, service, note_repo, scope, mock_session):
        note = await service.create_note(scope, title="Groceries", content="milk")

        assert note.tenant_id == TENANT
        assert note.user_id == "user-1"
        note_repo.add.assert_awaited_once_with(note)
        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    async def test_locks_tenant_before_counting(self, service, note_repo, scope):
        calls: list[str] = []
        note_repo.lock_tenant_plan.side_effect = (
            lambda *a, **kw: calls.append("lock") or TenantPlan.FREE
        )
        note_repo.count.side_effect = lambda *a, **kw: calls.append("count") or 0
        note_repo.add.side_effect = lambda *a, **kw: calls.append("add")

        await service.create_note(scope, title="x", content="")

        assert calls == ["lock", "count", "add"]
        note_repo.lock_tenant_plan.assert_awaited_once_with(scope, for_update=True)

    @pytest.mark.asyncio
    async def test_free_tenant_with_three_notes_is_refused(
        self, service, note_repo, scope, probe
    ):
        note_repo.count = AsyncMock(return_value=3)

        with pytest.raises(QuotaExceededError, match="limited to 3 notes"):
            await service.create_note(scope, title="x", content="")

        note_repo.add.assert_not_called()
        probe.quota_exceeded.assert_called_once_with(
            tenant_id=TENANT, plan="free", count=3
        )

    @pytest.mark.asyncio
    async def test_pro_tenant_is_unlimited(self, service, note_repo, scope):
        note_repo.lock_tenant_plan = AsyncMock(return_value=TenantPlan.PRO)
        note_repo.count = AsyncMock(return_value=500)

        await service.create_note(scope, title="x", content="")

        note_repo.add.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected_before_storage(
        self, service, note_repo, scope, mock_session
    ):
        with pytest.raises(InvalidNoteError, match="Title is required"):
            await service.create_note(scope, title="  ", content="")

        mock_session.begin.assert_not_called()
        note_repo.count.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_tenant_row_is_upstream(self, service, note_repo, scope):
        note_repo.lock_tenant_plan = AsyncMock(return_value=None)

        with pytest.raises(UpstreamError):
            await service.create_note(scope, title="x", content="")
        note_repo.add.assert_not_called()


class TestReadNotes:
    """Tests for list_notes() and get_note()."""

    @pytest.mark.asyncio
    async def test_list_is_scoped(self, service, note_repo, scope):
        notes = [Note.create(scope, title="a", content="")]
        note_repo.list_for_tenant = AsyncMock(return_value=notes)

        assert await service.list_notes(scope) == notes
        note_repo.list_for_tenant.assert_awaited_once_with(scope)

    @pytest.mark.asyncio
    async def test_get_existing(self, service, note_repo, scope):
        note = Note.create(scope, title="a", content="")
        note_repo.get = AsyncMock(return_value=note)

        assert await service.get_note(scope, note.id.value) is note
        note_repo.get.assert_awaited_once_with(scope, note.id)

    @pytest.mark.asyncio
    async def test_get_missing_or_foreign_is_not_found(
        self, service, note_repo, scope
    ):
        note_repo.get = AsyncMock(return_value=None)

        with pytest.raises(NoteNotFoundError, match="Note not found"):
            await service.get_note(scope, NoteId.generate().value)

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service, note_repo, scope):
        with pytest.raises(NoteNotFoundError):
            await service.get_note(scope, "not-a-ulid")
        note_repo.get.assert_not_called()


class TestUpdateNote:
    """Tests for NoteService.update_note()."""

    @pytest.mark.asyncio
    async def test_owner_updates(self, service, note_repo, scope):
        note = Note.create(scope, title="Draft", content="")
        note_repo.get_owned = AsyncMock(return_value=note)
        note_repo.update = AsyncMock(return_value=True)

        updated = await service.update_note(
            scope, note.id.value, title="Final", content="done"
        )

        assert updated.title == "Final"
        note_repo.get_owned.assert_awaited_once_with(scope, note.id)
        note_repo.update.assert_awaited_once_with(scope, note)

    @pytest.mark.asyncio
    async def test_non_owner_is_not_found(self, service, note_repo, scope):
        note_repo.get_owned = AsyncMock(return_value=None)

        with pytest.raises(NoteNotFoundError):
            await service.update_note(
                scope, NoteId.generate().value, title="x", content=""
            )
        note_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_vanished_between_read_and_write(self, service, note_repo, scope):
        note = Note.create(scope, title="Draft", content="")
        note_repo.get_owned = AsyncMock(return_value=note)
        note_repo.update = AsyncMock(return_value=False)

        with pytest.raises(NoteNotFoundError):
            await service.update_note(scope, note.id.value, title="x", content="")


class TestDeleteNote:
    """Tests for NoteService.delete_note()."""

    @pytest.mark.asyncio
    async def test_owner_deletes(self, service, note_repo, scope, probe):
        note_id = NoteId.generate()
        note_repo.delete = AsyncMock(return_value=True)

        await service.delete_note(scope, note_id.value)

        note_repo.delete.assert_awaited_once_with(scope, note_id)
        probe.note_deleted.assert_called_once()

    @pytest.mark.asyncio
    async def test_nothing_deleted_is_not_found(self, service, note_repo, scope):
        note_repo.delete = AsyncMock(return_value=False)

        with pytest.raises(NoteNotFoundError):
            await service.delete_note(scope, NoteId.generate().value)


class TestUsage:
    @pytest.mark.asyncio
    async def test_reports_count_and_limit_without_lock(
        self, service, note_repo, scope
    ):
        note_repo.count = AsyncMock(return_value=2)

        usage = await service.usage(scope)

        assert (usage.count, usage.limit) == (2, 3)
        note_repo.lock_tenant_plan.assert_awaited_once_with(scope, for_update=False)
