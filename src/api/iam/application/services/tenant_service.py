"""Tenant application service for IAM bounded context.

Handles plan transitions. Tenants themselves are created during onboarding,
outside this service.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultTenantServiceProbe, TenantServiceProbe
from iam.application.value_objects import Membership
from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantSlug
from iam.ports.exceptions import TenantNotFoundError
from iam.ports.repositories import ITenantRepository


class TenantService:
    """Application service for tenant plan management."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        session: AsyncSession,
        probe: TenantServiceProbe | None = None,
    ):
        """Initialize TenantService with dependencies.

        Args:
            tenant_repository: Repository for tenant persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._probe = probe or DefaultTenantServiceProbe()
        self._session = session

    async def upgrade_plan(self, membership: Membership, slug: str) -> Tenant:
        """Move a tenant to the pro plan.

        The caller must already hold an ``upgrade_plan`` grant for this slug.
        Upgrading a tenant that is already pro succeeds without a write.

        Args:
            membership: The upgrading admin's membership
            slug: Slug of the tenant to upgrade

        Returns:
            The updated Tenant

        Raises:
            TenantNotFoundError: If no tenant has this slug
        """
        try:
            tenant_slug = TenantSlug(slug)
        except ValueError as e:
            self._probe.tenant_not_found(slug=slug)
            raise TenantNotFoundError(f"Tenant {slug} not found") from e

        async with self._session.begin():
            tenant = await self._tenant_repository.get_by_slug(
                tenant_slug, for_update=True
            )
            if tenant is None:
                self._probe.tenant_not_found(slug=slug)
                raise TenantNotFoundError(f"Tenant {slug} not found")

            if not tenant.upgrade_to_pro():
                self._probe.plan_already_pro(tenant_id=tenant.id.value, slug=slug)
                return tenant

            await self._tenant_repository.save(tenant)

        self._probe.plan_upgraded(
            tenant_id=tenant.id.value,
            slug=slug,
            upgraded_by=membership.user_id.value,
        )
        return tenant
