"""Domain probe for access decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessDecisionProbe(Protocol):
    """Domain probe for the access decision point."""

    def access_granted(self, user_id: str, tenant_id: str, operation: str) -> None:
        """Record that an operation was allowed."""
        ...

    def access_denied(
        self, user_id: str, tenant_id: str, operation: str, reason: str
    ) -> None:
        """Record that an operation was denied."""
        ...

    def with_context(self, context: ObservationContext) -> AccessDecisionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessDecisionProbe:
    """Default implementation of AccessDecisionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessDecisionProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessDecisionProbe(logger=self._logger, context=context)

    def access_granted(self, user_id: str, tenant_id: str, operation: str) -> None:
        self._logger.debug(
            "access_granted",
            user_id=user_id,
            tenant_id=tenant_id,
            operation=operation,
            **self._get_context_kwargs(),
        )

    def access_denied(
        self, user_id: str, tenant_id: str, operation: str, reason: str
    ) -> None:
        self._logger.warning(
            "access_denied",
            user_id=user_id,
            tenant_id=tenant_id,
            operation=operation,
            reason=reason,
            **self._get_context_kwargs(),
        )
