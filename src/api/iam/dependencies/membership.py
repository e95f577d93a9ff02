"""Membership dependencies: which tenant does this request act within."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import AuthenticationProbe
from iam.application.services import MembershipResolver
from iam.application.value_objects import Membership, Principal
from iam.dependencies.authentication import get_authentication_probe, get_principal
from iam.infrastructure.profile_repository import ProfileRepository
from iam.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_read_session
from infrastructure.http_errors import to_http_exception
from shared_kernel.errors import DomainError


def get_membership_resolver(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> MembershipResolver:
    """Get MembershipResolver backed by the read session."""
    return MembershipResolver(
        profile_repository=ProfileRepository(session=session),
        tenant_repository=TenantRepository(session=session),
        probe=probe,
    )


async def get_membership(
    principal: Annotated[Principal, Depends(get_principal)],
    resolver: Annotated[MembershipResolver, Depends(get_membership_resolver)],
    x_tenant_slug: Annotated[str | None, Header(alias="X-Tenant-Slug")] = None,
) -> Membership:
    """Resolve the authenticated principal to one tenant membership.

    Raises:
        HTTPException 401: If the principal has no profile (in that tenant)
        HTTPException 400: If the principal belongs to several tenants and
            sent no X-Tenant-Slug header
    """
    try:
        return await resolver.resolve(principal, tenant_slug=x_tenant_slug)
    except DomainError as e:
        raise to_http_exception(e) from e
