"""Application-layer value objects for IAM bounded context.

These represent the authentication and authorization context of a request,
not core business entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from iam.domain.aggregates import Profile, Tenant
from iam.domain.value_objects import Role, TenantId, UserId


@dataclass(frozen=True)
class Principal:
    """A verified caller identity, independent of any tenant.

    Produced by credential verification and never persisted.
    """

    id: UserId
    email: str


@dataclass(frozen=True)
class Membership:
    """A principal resolved to exactly one tenant through its profile.

    Every downstream authorization and scoping decision reads from here.
    """

    principal: Principal
    profile: Profile
    tenant: Tenant

    @property
    def user_id(self) -> UserId:
        return self.principal.id

    @property
    def tenant_id(self) -> TenantId:
        return self.tenant.id

    @property
    def role(self) -> Role:
        return self.profile.role

    def is_admin(self) -> bool:
        """Check if the caller is an admin of the resolved tenant."""
        return self.profile.is_admin()


class Operation(StrEnum):
    """Operations the access decision point knows how to judge."""

    LIST_NOTES = "list_notes"
    GET_NOTE = "get_note"
    CREATE_NOTE = "create_note"
    UPDATE_NOTE = "update_note"
    DELETE_NOTE = "delete_note"
    VIEW_MEMBERSHIP = "view_membership"
    INVITE_USER = "invite_user"
    UPGRADE_PLAN = "upgrade_plan"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access decision: allow, or deny with a reason."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> AccessDecision:
        return cls(allowed=False, reason=reason)
