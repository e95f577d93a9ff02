"""Access decision point.

A pure function of (membership, operation, path tenant slug) with no I/O.
Rules are evaluated in order:

1. ``invite_user`` and ``upgrade_plan`` require the admin role.
2. ``upgrade_plan`` also requires the slug named in the request path to be
   the caller's own tenant.
3. Note operations and ``view_membership`` only require membership.

Denials always map to 403; failures to authenticate or resolve a
membership are 401 and happen before this point.
"""

from __future__ import annotations

from iam.application.observability import (
    AccessDecisionProbe,
    DefaultAccessDecisionProbe,
)
from iam.application.value_objects import AccessDecision, Membership, Operation
from iam.ports.exceptions import AccessDeniedError

ADMIN_OPERATIONS = frozenset({Operation.INVITE_USER, Operation.UPGRADE_PLAN})

ADMIN_REQUIRED_REASONS = {
    Operation.INVITE_USER: "Only admins can invite users",
    Operation.UPGRADE_PLAN: "Only admins can upgrade plans",
}

MEMBER_OPERATIONS = frozenset(
    {
        Operation.LIST_NOTES,
        Operation.GET_NOTE,
        Operation.CREATE_NOTE,
        Operation.UPDATE_NOTE,
        Operation.DELETE_NOTE,
        Operation.VIEW_MEMBERSHIP,
    }
)


def decide(
    membership: Membership,
    operation: Operation,
    tenant_slug: str | None = None,
) -> AccessDecision:
    """Decide whether a member may perform an operation.

    Args:
        membership: The caller's resolved membership
        operation: The requested operation
        tenant_slug: Tenant slug named in the request path, for
            tenant-scoped admin operations

    Returns:
        AccessDecision allowing the operation or denying it with a reason
    """
    if operation in ADMIN_OPERATIONS and not membership.is_admin():
        return AccessDecision.deny(ADMIN_REQUIRED_REASONS[operation])

    if operation == Operation.UPGRADE_PLAN:
        if tenant_slug is None or tenant_slug != membership.tenant.slug.value:
            return AccessDecision.deny("Cannot change the plan of another tenant")

    if operation in ADMIN_OPERATIONS or operation in MEMBER_OPERATIONS:
        return AccessDecision.allow()

    return AccessDecision.deny(f"Unknown operation: {operation}")


def enforce(
    membership: Membership,
    operation: Operation,
    tenant_slug: str | None = None,
    probe: AccessDecisionProbe | None = None,
) -> None:
    """Apply ``decide`` and raise on denial.

    Raises:
        AccessDeniedError: If the decision is a denial
    """
    probe = probe or DefaultAccessDecisionProbe()
    decision = decide(membership, operation, tenant_slug=tenant_slug)

    if not decision.allowed:
        reason = decision.reason or "Forbidden"
        probe.access_denied(
            user_id=membership.user_id.value,
            tenant_id=membership.tenant_id.value,
            operation=operation.value,
            reason=reason,
        )
        raise AccessDeniedError(reason)

    probe.access_granted(
        user_id=membership.user_id.value,
        tenant_id=membership.tenant_id.value,
        operation=operation.value,
    )
