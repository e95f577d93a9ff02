"""Domain probe for note service operations.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NoteServiceProbe(Protocol):
    """Domain probe for note service operations."""

    def notes_listed(self, tenant_id: str, count: int) -> None:
        """Record that a tenant's notes were listed."""
        ...

    def note_created(self, note_id: str, tenant_id: str, user_id: str) -> None:
        """Record that a note was created."""
        ...

    def note_updated(self, note_id: str, tenant_id: str) -> None:
        """Record that a note was updated."""
        ...

    def note_deleted(self, note_id: str, tenant_id: str) -> None:
        """Record that a note was deleted."""
        ...

    def note_not_found(self, note_id: str, tenant_id: str) -> None:
        """Record that a scoped lookup matched nothing."""
        ...

    def quota_exceeded(self, tenant_id: str, plan: str, count: int) -> None:
        """Record that a creation was refused by the plan quota."""
        ...

    def with_context(self, context: ObservationContext) -> NoteServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNoteServiceProbe:
    """Default implementation of NoteServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultNoteServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultNoteServiceProbe(logger=self._logger, context=context)

    def notes_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "notes_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def note_created(self, note_id: str, tenant_id: str, user_id: str) -> None:
        self._logger.info(
            "note_created",
            note_id=note_id,
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def note_updated(self, note_id: str, tenant_id: str) -> None:
        self._logger.info(
            "note_updated",
            note_id=note_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def note_deleted(self, note_id: str, tenant_id: str) -> None:
        self._logger.info(
            "note_deleted",
            note_id=note_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def note_not_found(self, note_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "note_not_found",
            note_id=note_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def quota_exceeded(self, tenant_id: str, plan: str, count: int) -> None:
        self._logger.info(
            "note_quota_exceeded",
            tenant_id=tenant_id,
            plan=plan,
            count=count,
            **self._get_context_kwargs(),
        )
