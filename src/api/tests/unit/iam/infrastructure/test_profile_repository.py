"""Unit tests for ProfileRepository with a mocked session."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Profile
from iam.domain.value_objects import Role, TenantId, TenantPlan, UserId
from iam.infrastructure.models import ProfileModel, TenantModel
from iam.infrastructure.observability import ProfileRepositoryProbe
from iam.infrastructure.profile_repository import ProfileRepository, first_and_only
from iam.ports.exceptions import DuplicateProfileError, MembershipIntegrityError

USER_ID = "3f6c1f5e-0c1a-4d1e-9a49-6c1d2e9b0a11"


@pytest.fixture
def session():
    session = Mock(spec=AsyncSession)
    session.flush = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def probe():
    return MagicMock(spec=ProfileRepositoryProbe)


@pytest.fixture
def repository(session, probe):
    return ProfileRepository(session=session, probe=probe)


def make_profile(tenant_id: TenantId) -> Profile:
    return Profile(
        id=UserId(USER_ID),
        tenant_id=tenant_id,
        email="alice@acme.test",
        role=Role.ADMIN,
    )


class TestFirstAndOnly:
    """Tests for first_and_only()."""

    def test_empty(self):
        assert first_and_only([]) is None

    def test_single(self):
        assert first_and_only(["row"]) == "row"

    def test_several_rows_is_integrity_violation(self):
        with pytest.raises(MembershipIntegrityError, match="found 2"):
            first_and_only(["a", "b"])


class TestAdd:
    """Tests for ProfileRepository.add()."""

    @pytest.mark.asyncio
    async def test_adds_model(self, repository, session, probe):
        tenant_id = TenantId.generate()

        await repository.add(make_profile(tenant_id))

        model = session.add.call_args.args[0]
        assert isinstance(model, ProfileModel)
        assert model.id == USER_ID
        assert model.tenant_id == tenant_id.value
        assert model.role == "admin"
        probe.profile_added.assert_called_once()

    @pytest.mark.asyncio
    async def test_primary_key_conflict_is_duplicate(self, repository, session):
        session.flush = AsyncMock(
            side_effect=IntegrityError(
                "INSERT INTO profiles",
                {},
                Exception(
                    'duplicate key value violates unique constraint "pk_profiles"'
                ),
            )
        )

        with pytest.raises(DuplicateProfileError):
            await repository.add(make_profile(TenantId.generate()))

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, repository, session):
        session.flush = AsyncMock(
            side_effect=IntegrityError(
                "INSERT INTO profiles",
                {},
                Exception("violates foreign key constraint"),
            )
        )

        with pytest.raises(IntegrityError):
            await repository.add(make_profile(TenantId.generate()))


class TestGetMembership:
    """Tests for ProfileRepository.get_membership()."""

    def _tenant_model(self, tenant_id: TenantId) -> TenantModel:
        return TenantModel(id=tenant_id.value, slug="acme", name="Acme", plan="pro")

    def _profile_model(self, tenant_id: TenantId) -> ProfileModel:
        return ProfileModel(
            id=USER_ID, tenant_id=tenant_id.value, email="alice@acme.test", role="admin"
        )

    @pytest.mark.asyncio
    async def test_single_row(self, repository, session):
        tenant_id = TenantId.generate()
        result = MagicMock()
        result.all.return_value = [
            (self._profile_model(tenant_id), self._tenant_model(tenant_id))
        ]
        session.execute = AsyncMock(return_value=result)

        membership = await repository.get_membership(UserId(USER_ID), tenant_id)

        assert membership is not None
        profile, tenant = membership
        assert profile.role == Role.ADMIN
        assert tenant.plan == TenantPlan.PRO
        assert tenant.slug.value == "acme"

    @pytest.mark.asyncio
    async def test_no_row(self, repository, session):
        result = MagicMock()
        result.all.return_value = []
        session.execute = AsyncMock(return_value=result)

        assert (
            await repository.get_membership(UserId(USER_ID), TenantId.generate())
            is None
        )

    @pytest.mark.asyncio
    async def test_several_rows(self, repository, session, probe):
        tenant_id = TenantId.generate()
        row = (self._profile_model(tenant_id), self._tenant_model(tenant_id))
        result = MagicMock()
        result.all.return_value = [row, row]
        session.execute = AsyncMock(return_value=result)

        with pytest.raises(MembershipIntegrityError):
            await repository.get_membership(UserId(USER_ID), tenant_id)
        probe.membership_integrity_violation.assert_called_once()
