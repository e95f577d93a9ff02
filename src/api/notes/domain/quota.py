"""Plan-based note quota."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from notes.domain.exceptions import QuotaExceededError
from shared_kernel.plans import TenantPlan

# None means unlimited
PLAN_NOTE_LIMITS = MappingProxyType(
    {
        TenantPlan.FREE: 3,
        TenantPlan.PRO: None,
    }
)


@dataclass(frozen=True)
class NoteUsage:
    """How many notes a tenant holds against its plan limit."""

    count: int
    limit: int | None

    @property
    def remaining(self) -> int | None:
        if self.limit is None:
            return None
        return max(self.limit - self.count, 0)


class QuotaGuard:
    """Checks a tenant's note count against its plan before a creation."""

    def __init__(self, limits: Mapping[TenantPlan, int | None] = PLAN_NOTE_LIMITS):
        self._limits = limits

    def limit_for(self, plan: TenantPlan) -> int | None:
        """Return the note limit of a plan, or None for unlimited."""
        return self._limits[plan]

    def usage(self, plan: TenantPlan, count: int) -> NoteUsage:
        return NoteUsage(count=count, limit=self.limit_for(plan))

    def check(self, plan: TenantPlan, current_count: int) -> None:
        """Allow a creation only while the count is strictly below the limit.

        Raises:
            QuotaExceededError: If the plan's limit is already reached
        """
        limit = self.limit_for(plan)
        if limit is not None and current_count >= limit:
            raise QuotaExceededError(
                f"{plan.value.capitalize()} plan limited to {limit} notes. "
                "Upgrade to Pro for unlimited notes.",
                limit=limit,
            )
