"""Pydantic models for tenant API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantPlan


class TenantResponse(BaseModel):
    """Response model for tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    slug: str = Field(..., description="URL-safe tenant handle")
    name: str = Field(..., description="Tenant name")
    plan: TenantPlan = Field(..., description="Subscription plan")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            slug=tenant.slug.value,
            name=tenant.name,
            plan=tenant.plan,
        )


class UpgradePlanResponse(BaseModel):
    """Response model for a plan upgrade."""

    success: bool = True
    message: str = "Successfully upgraded to Pro plan"
    tenant: TenantResponse
