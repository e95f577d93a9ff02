"""Identity provider ports for IAM bounded context.

The identity provider issues and verifies bearer tokens and stores
credentials. The service only needs the narrow contract below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class IdentityRecord:
    """An account known to the identity provider."""

    id: UserId
    email: str


@runtime_checkable
class IPrincipalVerifier(Protocol):
    """Verifies a bearer credential and names the principal behind it."""

    async def verify(self, token: str) -> IdentityRecord:
        """Verify a bearer token.

        Raises:
            InvalidCredentialError: If the token is malformed, expired, or
                rejected
            IdentityProviderError: If the provider cannot be reached
        """
        ...


@runtime_checkable
class IIdentityProvider(Protocol):
    """Administrative operations on identities.

    All methods raise IdentityProviderError on transport failures, timeouts,
    or unexpected responses.
    """

    async def find_by_email(self, email: str) -> IdentityRecord | None:
        """Find the identity registered with an email address."""
        ...

    async def create_identity(self, email: str, password: str) -> IdentityRecord:
        """Create a pre-confirmed identity with a known credential."""
        ...

    async def delete_identity(self, user_id: UserId) -> None:
        """Delete an identity."""
        ...
