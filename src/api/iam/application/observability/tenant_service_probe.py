"""Protocol for tenant application service observability.

Captures plan transitions, the only tenant mutation the service performs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant application service operations."""

    def plan_upgraded(self, tenant_id: str, slug: str, upgraded_by: str) -> None:
        """Record that a tenant moved to the pro plan."""
        ...

    def plan_already_pro(self, tenant_id: str, slug: str) -> None:
        """Record an upgrade request for a tenant already on pro."""
        ...

    def tenant_not_found(self, slug: str) -> None:
        """Record that a tenant was not found."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def plan_upgraded(self, tenant_id: str, slug: str, upgraded_by: str) -> None:
        """Record that a tenant moved to the pro plan."""
        self._logger.info(
            "tenant_plan_upgraded",
            tenant_id=tenant_id,
            slug=slug,
            upgraded_by=upgraded_by,
            **self._get_context_kwargs(),
        )

    def plan_already_pro(self, tenant_id: str, slug: str) -> None:
        """Record an upgrade request for a tenant already on pro."""
        self._logger.info(
            "tenant_plan_already_pro",
            tenant_id=tenant_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, slug: str) -> None:
        """Record that a tenant was not found."""
        self._logger.warning(
            "tenant_not_found",
            slug=slug,
            **self._get_context_kwargs(),
        )
