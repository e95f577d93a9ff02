"""PostgreSQL implementation of ITenantRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantId, TenantPlan, TenantSlug
from iam.infrastructure.models import TenantModel
from iam.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from iam.ports.repositories import ITenantRepository


def tenant_from_model(model: TenantModel) -> Tenant:
    """Reconstitute a Tenant aggregate from its ORM row."""
    return Tenant(
        id=TenantId(value=model.id),
        slug=TenantSlug(model.slug),
        name=model.name,
        plan=TenantPlan(model.plan),
    )


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Insert or update tenant metadata.

        Args:
            tenant: The Tenant aggregate to persist
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.slug = tenant.slug.value
            model.name = tenant.name
            model.plan = tenant.plan.value
        else:
            model = TenantModel(
                id=tenant.id.value,
                slug=tenant.slug.value,
                name=tenant.name,
                plan=tenant.plan.value,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.tenant_saved(tenant.id.value, plan=tenant.plan.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a tenant by ID, or None if not found."""
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return tenant_from_model(model)

    async def get_by_slug(
        self, slug: TenantSlug, for_update: bool = False
    ) -> Tenant | None:
        """Fetch a tenant by slug, or None if not found.

        Args:
            slug: The tenant slug
            for_update: Take a row lock held until the transaction ends
        """
        stmt = select(TenantModel).where(TenantModel.slug == slug.value)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return tenant_from_model(model)
