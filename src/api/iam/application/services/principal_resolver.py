"""Principal resolution: bearer credential to verified identity.

This is a hard boundary. Nothing downstream runs without a Principal.
"""

from __future__ import annotations

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import Principal
from iam.ports.exceptions import InvalidCredentialError
from iam.ports.identity_provider import IPrincipalVerifier
from shared_kernel.errors import Unauthenticated


class PrincipalResolver:
    """Turns a raw bearer credential into a verified Principal."""

    def __init__(
        self,
        verifier: IPrincipalVerifier,
        probe: AuthenticationProbe | None = None,
    ):
        self._verifier = verifier
        self._probe = probe or DefaultAuthenticationProbe()

    async def resolve(self, credential: str | None) -> Principal:
        """Verify a bearer credential.

        Args:
            credential: The token from the Authorization header, or None
                when the header was absent

        Returns:
            The verified Principal

        Raises:
            Unauthenticated: If the credential is missing, malformed, or
                rejected by the identity provider
            IdentityProviderError: If the provider could not be reached
        """
        if credential is None or not credential.strip():
            self._probe.authentication_failed(reason="Missing bearer token")
            raise InvalidCredentialError("Missing authorization header")

        try:
            identity = await self._verifier.verify(credential.strip())
        except Unauthenticated as e:
            self._probe.authentication_failed(reason=str(e))
            raise

        self._probe.principal_resolved(user_id=identity.id.value)
        return Principal(id=identity.id, email=identity.email)
