"""Bearer authentication dependencies.

Resolves the ``Authorization: Bearer`` header into a verified Principal,
either by validating the JWT locally or by asking the identity provider,
depending on ``NOTES_AUTH_VERIFICATION_MODE``.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated, AsyncGenerator, AsyncIterator

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services import PrincipalResolver
from iam.application.value_objects import Principal
from iam.infrastructure.gotrue_identity_provider import GoTrueIdentityProvider
from iam.infrastructure.jwt_principal_verifier import JWTPrincipalVerifier
from iam.ports.identity_provider import IPrincipalVerifier
from infrastructure.http_errors import to_http_exception
from infrastructure.settings import get_auth_settings, get_identity_provider_settings
from shared_kernel.auth import JWTValidator
from shared_kernel.auth.observability import DefaultJWTValidatorProbe
from shared_kernel.errors import DomainError

# auto_error=False so a missing header becomes our own 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator configured from auth settings."""
    settings = get_auth_settings()
    return JWTValidator(
        secret=settings.jwt_secret.get_secret_value(),
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        probe=DefaultJWTValidatorProbe(),
        user_id_claim=settings.user_id_claim,
        email_claim=settings.email_claim,
    )


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance."""
    return DefaultAuthenticationProbe()


@asynccontextmanager
async def identity_provider_client() -> AsyncIterator[GoTrueIdentityProvider]:
    """Open an HTTP client to the identity provider for one unit of work."""
    settings = get_identity_provider_settings()
    async with httpx.AsyncClient(
        base_url=settings.url,
        timeout=settings.timeout_seconds,
    ) as client:
        yield GoTrueIdentityProvider(
            client=client,
            service_role_key=settings.service_role_key.get_secret_value(),
            lookup_page_size=settings.lookup_page_size,
        )


async def get_identity_provider() -> AsyncGenerator[GoTrueIdentityProvider, None]:
    """Provide the identity provider adapter (FastAPI dependency)."""
    async with identity_provider_client() as provider:
        yield provider


async def get_principal_verifier() -> AsyncGenerator[IPrincipalVerifier, None]:
    """Provide the verifier selected by the configured verification mode."""
    if get_auth_settings().verification_mode == "jwt":
        yield JWTPrincipalVerifier(get_jwt_validator())
        return

    async with identity_provider_client() as provider:
        yield provider


def get_principal_resolver(
    verifier: Annotated[IPrincipalVerifier, Depends(get_principal_verifier)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> PrincipalResolver:
    """Get PrincipalResolver instance."""
    return PrincipalResolver(verifier=verifier, probe=probe)


async def get_principal(
    resolver: Annotated[PrincipalResolver, Depends(get_principal_resolver)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> Principal:
    """Resolve the request's bearer credential into a Principal.

    Raises:
        HTTPException 401: If the credential is missing or invalid
        HTTPException 502: If the identity provider could not be reached
    """
    token = credentials.credentials if credentials is not None else None
    try:
        return await resolver.resolve(token)
    except DomainError as e:
        raise to_http_exception(e) from e
