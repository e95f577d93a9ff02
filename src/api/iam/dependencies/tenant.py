from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from iam.application.services import TenantService
from iam.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_write_session


def get_tenant_service_probe() -> TenantServiceProbe:
    """Get TenantServiceProbe instance.

    Returns:
        DefaultTenantServiceProbe instance for observability
    """
    return DefaultTenantServiceProbe()


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> TenantRepository:
    """Get TenantRepository bound to the write session."""
    return TenantRepository(session=session)


def get_tenant_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    tenant_service_probe: Annotated[
        TenantServiceProbe, Depends(get_tenant_service_probe)
    ],
) -> TenantService:
    """Get TenantService instance.

    Args:
        tenant_repo: Tenant repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        tenant_service_probe: Tenant service probe for observability
    """
    return TenantService(
        tenant_repository=tenant_repo,
        session=session,
        probe=tenant_service_probe,
    )
