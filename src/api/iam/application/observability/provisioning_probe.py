"""Domain probe for the user provisioning workflow.

Every saga state transition is recorded so a failed invitation can be
replayed from the logs. A failed compensation is logged at ERROR because
it leaves an orphaned identity that an operator must remove.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProvisioningProbe(Protocol):
    """Domain probe for provisioning workflow operations."""

    def state_entered(self, state: str, email: str) -> None:
        """Record that the workflow entered a state."""
        ...

    def user_provisioned(
        self, user_id: str, tenant_id: str, role: str, is_new_user: bool
    ) -> None:
        """Record a successful invitation."""
        ...

    def already_member(self, user_id: str, tenant_id: str) -> None:
        """Record an invitation for someone already in the tenant."""
        ...

    def step_failed(self, state: str, email: str, error: str) -> None:
        """Record that a workflow step failed."""
        ...

    def compensation_succeeded(self, action: str, identity_id: str) -> None:
        """Record that a compensating action completed."""
        ...

    def compensation_failed(self, action: str, identity_id: str, error: str) -> None:
        """Record that a compensating action failed (needs manual reconciliation)."""
        ...

    def with_context(self, context: ObservationContext) -> ProvisioningProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProvisioningProbe:
    """Default implementation of ProvisioningProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProvisioningProbe:
        """Create a new probe with observation context bound."""
        return DefaultProvisioningProbe(logger=self._logger, context=context)

    def state_entered(self, state: str, email: str) -> None:
        self._logger.debug(
            "provisioning_state_entered",
            state=state,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_provisioned(
        self, user_id: str, tenant_id: str, role: str, is_new_user: bool
    ) -> None:
        self._logger.info(
            "user_provisioned",
            user_id=user_id,
            tenant_id=tenant_id,
            role=role,
            is_new_user=is_new_user,
            **self._get_context_kwargs(),
        )

    def already_member(self, user_id: str, tenant_id: str) -> None:
        self._logger.info(
            "provisioning_already_member",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def step_failed(self, state: str, email: str, error: str) -> None:
        self._logger.warning(
            "provisioning_step_failed",
            state=state,
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )

    def compensation_succeeded(self, action: str, identity_id: str) -> None:
        self._logger.info(
            "provisioning_compensation_succeeded",
            action=action,
            identity_id=identity_id,
            **self._get_context_kwargs(),
        )

    def compensation_failed(self, action: str, identity_id: str, error: str) -> None:
        self._logger.error(
            "provisioning_compensation_failed",
            action=action,
            identity_id=identity_id,
            error=error,
            **self._get_context_kwargs(),
        )
