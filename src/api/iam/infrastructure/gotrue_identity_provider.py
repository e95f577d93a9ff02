"""Identity provider adapter for GoTrue-compatible auth servers.

Talks to the REST API with an injected ``httpx.AsyncClient`` whose base URL
and timeout come from settings. Admin calls authenticate with the service
role key; principal verification forwards the caller's own token.
"""

from __future__ import annotations

from typing import Any

import httpx

from iam.domain.value_objects import UserId
from iam.infrastructure.observability import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from iam.ports.exceptions import IdentityProviderError, InvalidCredentialError
from iam.ports.identity_provider import (
    IdentityRecord,
    IIdentityProvider,
    IPrincipalVerifier,
)

USER_PATH = "/auth/v1/user"
ADMIN_USERS_PATH = "/auth/v1/admin/users"


def _record_from_payload(payload: dict[str, Any]) -> IdentityRecord:
    # Admin create returns the user object, some versions wrap it in "user"
    user = payload.get("user", payload)
    try:
        return IdentityRecord(
            id=UserId(value=str(user["id"])),
            email=user.get("email") or "",
        )
    except (KeyError, TypeError, ValueError) as e:
        raise IdentityProviderError("Identity provider returned no user id") from e


class GoTrueIdentityProvider(IIdentityProvider, IPrincipalVerifier):
    """GoTrue admin API client implementing the identity provider ports."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        service_role_key: str,
        lookup_page_size: int = 1000,
        probe: IdentityProviderProbe | None = None,
    ):
        """Initialize the adapter.

        Args:
            client: HTTP client with base_url pointing at the provider
            service_role_key: Key authorizing admin operations
            lookup_page_size: Accounts fetched per email lookup
            probe: Optional domain probe for observability
        """
        self._client = client
        self._service_role_key = service_role_key
        self._lookup_page_size = lookup_page_size
        self._probe = probe or DefaultIdentityProviderProbe()

    def _admin_headers(self) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
        }

    async def _request(
        self, operation: str, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self._probe.request_failed(operation=operation, error=str(e))
            raise IdentityProviderError(
                f"Identity provider unavailable during {operation}: {e}"
            ) from e
        return response

    def _raise_for_status(self, operation: str, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._probe.request_failed(operation=operation, error=str(e))
            raise IdentityProviderError(
                f"Identity provider rejected {operation} "
                f"(HTTP {response.status_code})"
            ) from e

    async def verify(self, token: str) -> IdentityRecord:
        """Ask the provider who owns a bearer token.

        Raises:
            InvalidCredentialError: If the provider rejects the token
            IdentityProviderError: On transport failure or unexpected status
        """
        response = await self._request(
            "verify",
            "GET",
            USER_PATH,
            headers={
                "apikey": self._service_role_key,
                "Authorization": f"Bearer {token}",
            },
        )
        if response.status_code in (401, 403, 422):
            self._probe.token_rejected(status_code=response.status_code)
            raise InvalidCredentialError("Invalid token")
        self._raise_for_status("verify", response)
        return _record_from_payload(response.json())

    async def find_by_email(self, email: str) -> IdentityRecord | None:
        """Find an account by email, ignoring case.

        Only the first page of accounts is scanned; the page size is
        configurable up to the provider's maximum.
        """
        response = await self._request(
            "find_by_email",
            "GET",
            ADMIN_USERS_PATH,
            params={"page": 1, "per_page": self._lookup_page_size},
            headers=self._admin_headers(),
        )
        self._raise_for_status("find_by_email", response)

        wanted = email.casefold()
        users = response.json().get("users") or []
        for user in users:
            if (user.get("email") or "").casefold() == wanted:
                self._probe.identity_lookup_completed(found=True)
                return _record_from_payload(user)

        self._probe.identity_lookup_completed(found=False)
        return None

    async def create_identity(self, email: str, password: str) -> IdentityRecord:
        """Create a pre-confirmed account with a known password."""
        response = await self._request(
            "create_identity",
            "POST",
            ADMIN_USERS_PATH,
            json={"email": email, "password": password, "email_confirm": True},
            headers=self._admin_headers(),
        )
        self._raise_for_status("create_identity", response)

        record = _record_from_payload(response.json())
        self._probe.identity_created(identity_id=record.id.value)
        return record

    async def delete_identity(self, user_id: UserId) -> None:
        """Delete an account."""
        response = await self._request(
            "delete_identity",
            "DELETE",
            f"{ADMIN_USERS_PATH}/{user_id.value}",
            headers=self._admin_headers(),
        )
        self._raise_for_status("delete_identity", response)
        self._probe.identity_deleted(identity_id=user_id.value)
