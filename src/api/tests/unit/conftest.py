"""Unit test fixtures shared across bounded contexts."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.value_objects import Membership, Principal
from iam.domain.aggregates import Profile, Tenant
from iam.domain.value_objects import Role, TenantId, TenantPlan, TenantSlug, UserId

ADMIN_ID = "3f6c1f5e-0c1a-4d1e-9a49-6c1d2e9b0a11"
MEMBER_ID = "8b2e4c7a-5d3f-4a8b-b1c2-9e0f1a2b3c4d"


def make_tenant(
    slug: str = "acme",
    name: str = "Acme Corp",
    plan: TenantPlan = TenantPlan.FREE,
) -> Tenant:
    """Build a tenant with a fresh id."""
    return Tenant(
        id=TenantId.generate(),
        slug=TenantSlug(slug),
        name=name,
        plan=plan,
    )


def make_membership(
    tenant: Tenant | None = None,
    role: Role = Role.ADMIN,
    user_id: str = ADMIN_ID,
    email: str = "alice@acme.test",
) -> Membership:
    """Build a membership of a principal in a tenant."""
    tenant = tenant or make_tenant()
    principal = Principal(id=UserId(user_id), email=email)
    profile = Profile(id=principal.id, tenant_id=tenant.id, email=email, role=role)
    return Membership(principal=principal, profile=profile, tenant=tenant)


@pytest.fixture
def build_tenant():
    """Factory for tenants, for tests that need more than one."""
    return make_tenant


@pytest.fixture
def build_membership():
    """Factory for memberships."""
    return make_membership


@pytest.fixture
def tenant() -> Tenant:
    return make_tenant()


@pytest.fixture
def admin_membership(tenant) -> Membership:
    return make_membership(tenant=tenant, role=Role.ADMIN)


@pytest.fixture
def member_membership(tenant) -> Membership:
    return make_membership(
        tenant=tenant, role=Role.MEMBER, user_id=MEMBER_ID, email="bob@acme.test"
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session
