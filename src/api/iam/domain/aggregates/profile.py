"""Profile aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import Role, TenantId, UserId


@dataclass(frozen=True)
class Profile:
    """Binding of a principal to a tenant with a role.

    The profile id is the principal's id at the identity provider. One
    principal may hold profiles in several tenants, but at most one per
    tenant, so (id, tenant_id) identifies a profile.
    """

    id: UserId
    tenant_id: TenantId
    email: str
    role: Role

    @classmethod
    def provision(
        cls,
        user_id: UserId,
        tenant_id: TenantId,
        email: str,
        role: Role = Role.MEMBER,
    ) -> Profile:
        """Create a profile for a principal joining a tenant.

        Raises:
            ValueError: If the email is not syntactically valid
        """
        if "@" not in email:
            raise ValueError(f"Invalid email address: {email}")
        return cls(id=user_id, tenant_id=tenant_id, email=email, role=role)

    def is_admin(self) -> bool:
        """Check if this profile has the admin role."""
        return self.role == Role.ADMIN

    def belongs_to(self, tenant_id: TenantId) -> bool:
        """Check if this profile binds its principal to the given tenant."""
        return self.tenant_id == tenant_id
