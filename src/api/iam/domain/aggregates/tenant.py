"""Tenant aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import TenantId, TenantPlan, TenantSlug


@dataclass
class Tenant:
    """Tenant aggregate representing a customer organization.

    Tenants are the top-level isolation boundary in the system: every
    profile and every note belongs to exactly one tenant.

    Business rules:
    - Slugs are URL-safe and globally unique
    - The plan is the only attribute that changes after creation, and only
      through ``upgrade_to_pro``
    - There is no downgrade path
    """

    id: TenantId
    slug: TenantSlug
    name: str
    plan: TenantPlan = TenantPlan.FREE

    @classmethod
    def create(cls, slug: str, name: str) -> Tenant:
        """Factory method for creating a new tenant on the free plan.

        Raises:
            ValueError: If the slug is not URL-safe or the name is blank
        """
        if not name or not name.strip():
            raise ValueError("Tenant name cannot be empty")
        return cls(
            id=TenantId.generate(),
            slug=TenantSlug(slug),
            name=name.strip(),
        )

    @property
    def is_pro(self) -> bool:
        """Check whether the tenant is on the pro plan."""
        return self.plan == TenantPlan.PRO

    def upgrade_to_pro(self) -> bool:
        """Move the tenant to the pro plan.

        Idempotent: upgrading a pro tenant leaves it unchanged.

        Returns:
            True if the plan changed, False if the tenant was already pro
        """
        if self.is_pro:
            return False
        self.plan = TenantPlan.PRO
        return True
