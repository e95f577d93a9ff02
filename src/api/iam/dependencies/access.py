"""Access decision dependencies.

Routes declare the operation they perform; the dependency resolves the
caller's membership and runs it through the access decision point before
the handler body executes.
"""

from typing import Annotated, Awaitable, Callable

from fastapi import Depends

from iam.application.access import enforce
from iam.application.observability import (
    AccessDecisionProbe,
    DefaultAccessDecisionProbe,
)
from iam.application.value_objects import Membership, Operation
from iam.dependencies.membership import get_membership
from infrastructure.http_errors import to_http_exception
from shared_kernel.errors import DomainError


def get_access_decision_probe() -> AccessDecisionProbe:
    """Get AccessDecisionProbe instance."""
    return DefaultAccessDecisionProbe()


def require(operation: Operation) -> Callable[..., Awaitable[Membership]]:
    """Build a dependency granting ``operation`` to the current member.

    Not suitable for operations scoped to a path-named tenant; use
    ``require_plan_upgrade`` for those.
    """

    async def dependency(
        membership: Annotated[Membership, Depends(get_membership)],
        probe: Annotated[AccessDecisionProbe, Depends(get_access_decision_probe)],
    ) -> Membership:
        try:
            enforce(membership, operation, probe=probe)
        except DomainError as e:
            raise to_http_exception(e) from e
        return membership

    dependency.__name__ = f"require_{operation.value}"
    return dependency


async def require_plan_upgrade(
    slug: str,
    membership: Annotated[Membership, Depends(get_membership)],
    probe: Annotated[AccessDecisionProbe, Depends(get_access_decision_probe)],
) -> Membership:
    """Grant ``upgrade_plan`` for the tenant named by the ``slug`` path parameter."""
    try:
        enforce(membership, Operation.UPGRADE_PLAN, tenant_slug=slug, probe=probe)
    except DomainError as e:
        raise to_http_exception(e) from e
    return membership
