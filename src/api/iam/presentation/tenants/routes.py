"""HTTP routes for tenant plan management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import TenantService
from iam.application.value_objects import Membership
from iam.dependencies.access import require_plan_upgrade
from iam.dependencies.tenant import get_tenant_service
from iam.presentation.tenants.models import TenantResponse, UpgradePlanResponse
from infrastructure.http_errors import to_http_exception
from shared_kernel.errors import DomainError

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.post("/{slug}/upgrade")
async def upgrade_plan(
    slug: str,
    membership: Annotated[Membership, Depends(require_plan_upgrade)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> UpgradePlanResponse:
    """Upgrade the caller's tenant to the pro plan.

    Only an admin of the tenant named in the path may upgrade it. Upgrading
    a tenant that is already on pro succeeds.

    Raises:
        HTTPException: 401 if unauthenticated
        HTTPException: 403 if not an admin of this tenant
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = await service.upgrade_plan(membership, slug)
        return UpgradePlanResponse(tenant=TenantResponse.from_domain(tenant))

    except DomainError as e:
        raise to_http_exception(e) from e
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upgrade plan",
        )
