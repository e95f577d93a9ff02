"""Domain probe for identity provider calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProviderProbe(Protocol):
    """Domain probe for the identity provider adapter."""

    def identity_lookup_completed(self, found: bool) -> None:
        """Record the outcome of an email lookup."""
        ...

    def identity_created(self, identity_id: str) -> None:
        """Record that an identity was created."""
        ...

    def identity_deleted(self, identity_id: str) -> None:
        """Record that an identity was deleted."""
        ...

    def token_rejected(self, status_code: int) -> None:
        """Record that the provider rejected a bearer token."""
        ...

    def request_failed(self, operation: str, error: str) -> None:
        """Record a transport failure or unexpected response."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProviderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProviderProbe:
    """Default implementation of IdentityProviderProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultIdentityProviderProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProviderProbe(logger=self._logger, context=context)

    def identity_lookup_completed(self, found: bool) -> None:
        self._logger.debug(
            "identity_lookup_completed",
            found=found,
            **self._get_context_kwargs(),
        )

    def identity_created(self, identity_id: str) -> None:
        self._logger.info(
            "identity_created",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def identity_deleted(self, identity_id: str) -> None:
        self._logger.info(
            "identity_deleted",
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, status_code: int) -> None:
        self._logger.warning(
            "identity_provider_token_rejected",
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: str) -> None:
        self._logger.error(
            "identity_provider_request_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
