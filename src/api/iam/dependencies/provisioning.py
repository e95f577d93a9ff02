from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultProvisioningProbe,
    ProvisioningProbe,
)
from iam.application.services import ProvisioningWorkflow
from iam.dependencies.authentication import get_identity_provider
from iam.infrastructure.gotrue_identity_provider import GoTrueIdentityProvider
from iam.infrastructure.profile_repository import ProfileRepository
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import get_identity_provider_settings


def get_provisioning_probe() -> ProvisioningProbe:
    """Get ProvisioningProbe instance."""
    return DefaultProvisioningProbe()


def get_profile_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> ProfileRepository:
    """Get ProfileRepository bound to the write session."""
    return ProfileRepository(session=session)


def get_provisioning_workflow(
    identity_provider: Annotated[
        GoTrueIdentityProvider, Depends(get_identity_provider)
    ],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[ProvisioningProbe, Depends(get_provisioning_probe)],
) -> ProvisioningWorkflow:
    """Get a ProvisioningWorkflow for one invitation."""
    settings = get_identity_provider_settings()
    return ProvisioningWorkflow(
        identity_provider=identity_provider,
        profile_repository=profile_repo,
        session=session,
        default_password=settings.invite_default_password.get_secret_value(),
        probe=probe,
    )
