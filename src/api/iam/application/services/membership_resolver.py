"""Membership resolution: verified principal to exactly one tenant.

A principal may hold profiles in several tenants (the provisioning workflow
attaches existing identities to new tenants). The caller picks one with a
tenant slug; a principal with a single profile may omit it.
"""

from __future__ import annotations

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import Membership, Principal
from iam.domain.value_objects import TenantSlug
from iam.ports.exceptions import AmbiguousMembershipError, ProfileNotFoundError
from iam.ports.repositories import IProfileRepository, ITenantRepository


class MembershipResolver:
    """Loads the profile and tenant a request acts within."""

    def __init__(
        self,
        profile_repository: IProfileRepository,
        tenant_repository: ITenantRepository,
        probe: AuthenticationProbe | None = None,
    ):
        self._profile_repository = profile_repository
        self._tenant_repository = tenant_repository
        self._probe = probe or DefaultAuthenticationProbe()

    async def resolve(
        self, principal: Principal, tenant_slug: str | None = None
    ) -> Membership:
        """Resolve a principal to a single membership.

        Args:
            principal: The verified caller
            tenant_slug: Tenant the request targets; required only when the
                principal has profiles in more than one tenant

        Returns:
            Membership carrying the profile and fully loaded tenant

        Raises:
            ProfileNotFoundError: If the principal has no profile, or none in
                the named tenant
            AmbiguousMembershipError: If several profiles exist and no tenant
                was named
            MembershipIntegrityError: If storage returns several records for
                one (principal, tenant) pair
        """
        profiles = await self._profile_repository.list_by_user(principal.id)
        if not profiles:
            self._probe.profile_not_found(
                user_id=principal.id.value, tenant_slug=tenant_slug
            )
            raise ProfileNotFoundError("Profile not found")

        if tenant_slug:
            try:
                slug = TenantSlug(tenant_slug)
            except ValueError as e:
                self._probe.profile_not_found(
                    user_id=principal.id.value, tenant_slug=tenant_slug
                )
                raise ProfileNotFoundError("Profile not found") from e

            tenant = await self._tenant_repository.get_by_slug(slug)
            if tenant is None or not any(p.belongs_to(tenant.id) for p in profiles):
                self._probe.profile_not_found(
                    user_id=principal.id.value, tenant_slug=tenant_slug
                )
                raise ProfileNotFoundError("Profile not found")
            target_tenant_id = tenant.id
        elif len(profiles) > 1:
            self._probe.ambiguous_membership(
                user_id=principal.id.value, tenant_count=len(profiles)
            )
            raise AmbiguousMembershipError(
                "Member of several tenants; set the X-Tenant-Slug header"
            )
        else:
            target_tenant_id = profiles[0].tenant_id

        row = await self._profile_repository.get_membership(
            principal.id, target_tenant_id
        )
        if row is None:
            self._probe.profile_not_found(
                user_id=principal.id.value, tenant_slug=tenant_slug
            )
            raise ProfileNotFoundError("Profile not found")

        profile, tenant = row
        self._probe.membership_resolved(
            user_id=principal.id.value,
            tenant_id=tenant.id.value,
            role=profile.role.value,
        )
        return Membership(principal=principal, profile=profile, tenant=tenant)
