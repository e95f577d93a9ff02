"""HTTP route describing the caller's own membership."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from iam.application.value_objects import Membership, Operation
from iam.dependencies.access import require
from iam.presentation.tenants.models import TenantResponse
from iam.presentation.users.models import ProfileResponse

router = APIRouter(tags=["me"])


class MembershipResponse(BaseModel):
    """The caller's profile and the tenant it resolves to."""

    profile: ProfileResponse
    tenant: TenantResponse

    @classmethod
    def from_domain(cls, membership: Membership) -> MembershipResponse:
        return cls(
            profile=ProfileResponse.from_domain(membership.profile),
            tenant=TenantResponse.from_domain(membership.tenant),
        )


@router.get("/me")
async def get_me(
    membership: Annotated[Membership, Depends(require(Operation.VIEW_MEMBERSHIP))],
) -> MembershipResponse:
    """Return the caller's profile and tenant (plan, slug, name)."""
    return MembershipResponse.from_domain(membership)
