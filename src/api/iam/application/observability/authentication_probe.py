"""Protocol for authentication observability.

Captures principal and membership resolution events, the two steps every
request passes before any authorization decision.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for principal and membership resolution."""

    def principal_resolved(self, user_id: str) -> None:
        """Record that a bearer credential was verified."""
        ...

    def authentication_failed(self, reason: str) -> None:
        """Record that a bearer credential was missing or rejected."""
        ...

    def membership_resolved(self, user_id: str, tenant_id: str, role: str) -> None:
        """Record that a principal was resolved to a tenant."""
        ...

    def profile_not_found(self, user_id: str, tenant_slug: str | None) -> None:
        """Record that a verified principal has no usable profile."""
        ...

    def ambiguous_membership(self, user_id: str, tenant_count: int) -> None:
        """Record that a multi-tenant principal did not choose a tenant."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def principal_resolved(self, user_id: str) -> None:
        self._logger.debug(
            "principal_resolved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str) -> None:
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def membership_resolved(self, user_id: str, tenant_id: str, role: str) -> None:
        self._logger.debug(
            "membership_resolved",
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def profile_not_found(self, user_id: str, tenant_slug: str | None) -> None:
        self._logger.warning(
            "profile_not_found",
            user_id=user_id,
            tenant_slug=tenant_slug,
            **self._get_context_kwargs(),
        )

    def ambiguous_membership(self, user_id: str, tenant_count: int) -> None:
        self._logger.info(
            "ambiguous_membership",
            user_id=user_id,
            tenant_count=tenant_count,
            **self._get_context_kwargs(),
        )
