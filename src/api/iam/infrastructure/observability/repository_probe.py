"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant and profile persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str, plan: str) -> None:
        """Record that a tenant was saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class ProfileRepositoryProbe(Protocol):
    """Domain probe for profile repository operations."""

    def profile_added(self, user_id: str, tenant_id: str, role: str) -> None:
        """Record that a profile was inserted."""
        ...

    def duplicate_profile(self, user_id: str, tenant_id: str) -> None:
        """Record that a profile insert hit an existing (id, tenant_id)."""
        ...

    def profiles_listed(self, user_id: str, count: int) -> None:
        """Record that a principal's profiles were listed."""
        ...

    def membership_integrity_violation(
        self, user_id: str, tenant_id: str, row_count: int
    ) -> None:
        """Record that a membership join returned more than one row."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str, plan: str) -> None:
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            plan=plan,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )


class DefaultProfileRepositoryProbe:
    """Default implementation of ProfileRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileRepositoryProbe(logger=self._logger, context=context)

    def profile_added(self, user_id: str, tenant_id: str, role: str) -> None:
        self._logger.info(
            "profile_added",
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def duplicate_profile(self, user_id: str, tenant_id: str) -> None:
        self._logger.warning(
            "duplicate_profile",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def profiles_listed(self, user_id: str, count: int) -> None:
        self._logger.debug(
            "profiles_listed",
            user_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def membership_integrity_violation(
        self, user_id: str, tenant_id: str, row_count: int
    ) -> None:
        self._logger.error(
            "membership_integrity_violation",
            user_id=user_id,
            tenant_id=tenant_id,
            row_count=row_count,
            **self._get_context_kwargs(),
        )
