"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations live in the infrastructure layer and receive
an AsyncSession; transaction boundaries belong to application services.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Profile, Tenant
from iam.domain.value_objects import TenantId, TenantSlug, UserId


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence."""

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant aggregate (insert or update)."""
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID."""
        ...

    async def get_by_slug(
        self, slug: TenantSlug, for_update: bool = False
    ) -> Tenant | None:
        """Retrieve a tenant by its slug.

        Args:
            slug: The tenant slug
            for_update: Lock the tenant row until the transaction ends
        """
        ...


@runtime_checkable
class IProfileRepository(Protocol):
    """Repository for Profile aggregate persistence."""

    async def add(self, profile: Profile) -> None:
        """Insert a new profile.

        Raises:
            DuplicateProfileError: If (id, tenant_id) already exists
        """
        ...

    async def get(self, user_id: UserId, tenant_id: TenantId) -> Profile | None:
        """Retrieve the profile binding a principal to a tenant."""
        ...

    async def list_by_user(self, user_id: UserId) -> list[Profile]:
        """List every profile of a principal, across tenants."""
        ...

    async def get_membership(
        self, user_id: UserId, tenant_id: TenantId
    ) -> tuple[Profile, Tenant] | None:
        """Load a profile joined with its tenant.

        Returns:
            The (profile, tenant) pair, or None if the principal has no
            profile in that tenant

        Raises:
            MembershipIntegrityError: If the join yields more than one row
        """
        ...
