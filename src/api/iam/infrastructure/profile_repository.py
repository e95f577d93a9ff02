"""PostgreSQL implementation of IProfileRepository."""

from __future__ import annotations

from typing import Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Profile, Tenant
from iam.domain.value_objects import Role, TenantId, UserId
from iam.infrastructure.models import ProfileModel, TenantModel
from iam.infrastructure.observability import (
    DefaultProfileRepositoryProbe,
    ProfileRepositoryProbe,
)
from iam.infrastructure.tenant_repository import tenant_from_model
from iam.ports.exceptions import DuplicateProfileError, MembershipIntegrityError
from iam.ports.repositories import IProfileRepository

T = TypeVar("T")


def first_and_only(rows: Sequence[T]) -> T | None:
    """Normalize a join result that should hold at most one record.

    Returns:
        None for no rows, the single row otherwise

    Raises:
        MembershipIntegrityError: If more than one row came back
    """
    if not rows:
        return None
    if len(rows) > 1:
        raise MembershipIntegrityError(
            f"Expected one membership record, found {len(rows)}"
        )
    return rows[0]


def profile_from_model(model: ProfileModel) -> Profile:
    """Reconstitute a Profile aggregate from its ORM row."""
    return Profile(
        id=UserId(value=model.id),
        tenant_id=TenantId(value=model.tenant_id),
        email=model.email,
        role=Role(model.role),
    )


class ProfileRepository(IProfileRepository):
    """Repository managing PostgreSQL storage for Profile aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ProfileRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultProfileRepositoryProbe()

    async def add(self, profile: Profile) -> None:
        """Insert a new profile.

        Raises:
            DuplicateProfileError: If the principal already has a profile in
                the tenant
        """
        model = ProfileModel(
            id=profile.id.value,
            tenant_id=profile.tenant_id.value,
            email=profile.email,
            role=profile.role.value,
        )
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "pk_profiles" in str(e):
                self._probe.duplicate_profile(
                    profile.id.value, profile.tenant_id.value
                )
                raise DuplicateProfileError(
                    f"Profile {profile.id.value} already exists in tenant "
                    f"{profile.tenant_id.value}"
                ) from e
            raise

        self._probe.profile_added(
            profile.id.value, profile.tenant_id.value, role=profile.role.value
        )

    async def get(self, user_id: UserId, tenant_id: TenantId) -> Profile | None:
        """Fetch the profile binding a principal to a tenant."""
        stmt = select(ProfileModel).where(
            ProfileModel.id == user_id.value,
            ProfileModel.tenant_id == tenant_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return profile_from_model(model) if model is not None else None

    async def list_by_user(self, user_id: UserId) -> list[Profile]:
        """List every profile of a principal, oldest first."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.id == user_id.value)
            .order_by(ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        profiles = [profile_from_model(m) for m in result.scalars().all()]

        self._probe.profiles_listed(user_id.value, count=len(profiles))
        return profiles

    async def get_membership(
        self, user_id: UserId, tenant_id: TenantId
    ) -> tuple[Profile, Tenant] | None:
        """Load a profile joined with its tenant.

        Raises:
            MembershipIntegrityError: If the join yields more than one row
        """
        stmt = (
            select(ProfileModel, TenantModel)
            .join(TenantModel, ProfileModel.tenant_id == TenantModel.id)
            .where(
                ProfileModel.id == user_id.value,
                ProfileModel.tenant_id == tenant_id.value,
            )
        )
        result = await self._session.execute(stmt)
        rows = result.all()

        try:
            row = first_and_only(rows)
        except MembershipIntegrityError:
            self._probe.membership_integrity_violation(
                user_id.value, tenant_id.value, row_count=len(rows)
            )
            raise

        if row is None:
            return None

        profile_model, tenant_model = row
        return profile_from_model(profile_model), tenant_from_model(tenant_model)
