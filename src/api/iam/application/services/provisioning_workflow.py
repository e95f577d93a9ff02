"""User provisioning workflow (invite a user into the caller's tenant).

Modelled as a saga with named states and a compensation table:

    START -> LOOKUP_EXISTING_IDENTITY
      no match: CREATE_IDENTITY -> CREATE_PROFILE -> SUCCEEDED
                                   CREATE_PROFILE fails -> ROLLBACK_IDENTITY -> FAILED
                                   rollback fails -> PARTIAL_FAILURE
      match:    CHECK_SAME_TENANT -> ALREADY_MEMBER
                                  -> CREATE_PROFILE_FOR_EXISTING -> SUCCEEDED

Compensation runs synchronously; the caller never sees a failure while a
rollback is still pending.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import NoReturn

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultProvisioningProbe,
    ProvisioningProbe,
)
from iam.application.value_objects import Membership
from iam.domain.aggregates import Profile
from iam.domain.value_objects import Role
from iam.ports.exceptions import (
    AlreadyMemberError,
    DuplicateProfileError,
    InvalidInvitationError,
    PartialFailureError,
    ProfileProvisioningError,
)
from iam.ports.identity_provider import IdentityRecord, IIdentityProvider
from iam.ports.repositories import IProfileRepository
from shared_kernel.errors import DomainError


class ProvisioningState(StrEnum):
    """Named states of the provisioning saga."""

    START = "start"
    LOOKUP_EXISTING_IDENTITY = "lookup_existing_identity"
    CREATE_IDENTITY = "create_identity"
    CREATE_PROFILE = "create_profile"
    ROLLBACK_IDENTITY = "rollback_identity"
    CHECK_SAME_TENANT = "check_same_tenant"
    CREATE_PROFILE_FOR_EXISTING = "create_profile_for_existing"
    SUCCEEDED = "succeeded"
    ALREADY_MEMBER = "already_member"
    FAILED = "failed"
    PARTIAL_FAILURE = "partial_failure"


class CompensationAction(StrEnum):
    """Actions that undo a completed step."""

    DELETE_IDENTITY = "delete_identity"


# Completed step -> action that undoes it if a later step fails
COMPENSATIONS: dict[ProvisioningState, CompensationAction] = {
    ProvisioningState.CREATE_IDENTITY: CompensationAction.DELETE_IDENTITY,
}


@dataclass(frozen=True)
class ProvisioningResult:
    """Successful outcome of an invitation."""

    profile: Profile
    is_new_user: bool

    @property
    def message(self) -> str:
        if self.is_new_user:
            return "User created and added to tenant successfully"
        return "User added to tenant successfully"


class ProvisioningWorkflow:
    """Creates or attaches an identity and binds it to the caller's tenant.

    The caller must already hold an ``invite_user`` grant from the access
    decision point.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_repository: IProfileRepository,
        session: AsyncSession,
        default_password: str,
        probe: ProvisioningProbe | None = None,
    ):
        """Initialize the workflow.

        Args:
            identity_provider: Admin API of the identity provider
            profile_repository: Repository for profile persistence
            session: Database session for transaction management
            default_password: Known credential given to new identities
            probe: Optional domain probe for observability
        """
        self._identity_provider = identity_provider
        self._profile_repository = profile_repository
        self._session = session
        self._default_password = default_password
        self._probe = probe or DefaultProvisioningProbe()
        self._state = ProvisioningState.START
        self._completed: list[tuple[ProvisioningState, IdentityRecord]] = []

    @property
    def state(self) -> ProvisioningState:
        """The state the last run ended in."""
        return self._state

    def _enter(self, state: ProvisioningState, email: str) -> None:
        self._state = state
        self._probe.state_entered(state=state.value, email=email)

    async def invite(
        self,
        membership: Membership,
        email: str | None,
        role: Role | str | None = Role.MEMBER,
    ) -> ProvisioningResult:
        """Invite a user into the caller's tenant.

        Args:
            membership: The inviting admin's membership
            email: Email address of the invitee, matched case-insensitively
            role: Role to grant (member when None)

        Returns:
            ProvisioningResult with the new profile and whether the identity
            was created by this call

        Raises:
            InvalidInvitationError: If the email or role is invalid
            AlreadyMemberError: If the identity already has a profile in the
                tenant
            IdentityProviderError: If the identity provider fails
            ProfileProvisioningError: If the profile could not be stored and
                the new identity was rolled back
            PartialFailureError: If the rollback itself failed
        """
        # The identity provider stores addresses lowercased
        email = (email or "").strip().lower()
        if "@" not in email:
            raise InvalidInvitationError("Valid email is required")
        try:
            role = Role(role or Role.MEMBER)
        except ValueError as e:
            raise InvalidInvitationError("Role must be admin or member") from e

        self._completed = []
        self._enter(ProvisioningState.START, email)

        self._enter(ProvisioningState.LOOKUP_EXISTING_IDENTITY, email)
        existing = await self._identity_provider.find_by_email(email)

        if existing is not None:
            return await self._attach_existing(membership, existing, role)
        return await self._create_new(membership, email, role)

    async def _attach_existing(
        self, membership: Membership, identity: IdentityRecord, role: Role
    ) -> ProvisioningResult:
        self._enter(ProvisioningState.CHECK_SAME_TENANT, identity.email)

        async with self._session.begin():
            current = await self._profile_repository.get(
                identity.id, membership.tenant_id
            )
            if current is not None:
                self._already_member(identity, membership)

            self._enter(ProvisioningState.CREATE_PROFILE_FOR_EXISTING, identity.email)
            profile = Profile.provision(
                user_id=identity.id,
                tenant_id=membership.tenant_id,
                email=identity.email,
                role=role,
            )
            try:
                await self._profile_repository.add(profile)
            except DuplicateProfileError:
                # Lost a race with a concurrent invitation for the same identity
                self._already_member(identity, membership)

        return self._succeed(profile, is_new_user=False)

    async def _create_new(
        self, membership: Membership, email: str, role: Role
    ) -> ProvisioningResult:
        self._enter(ProvisioningState.CREATE_IDENTITY, email)
        try:
            identity = await self._identity_provider.create_identity(
                email=email, password=self._default_password
            )
        except DomainError as e:
            # Nothing was created, so there is nothing to compensate
            self._probe.step_failed(
                state=ProvisioningState.CREATE_IDENTITY.value,
                email=email,
                error=str(e),
            )
            self._state = ProvisioningState.FAILED
            raise
        self._completed.append((ProvisioningState.CREATE_IDENTITY, identity))

        self._enter(ProvisioningState.CREATE_PROFILE, email)
        try:
            profile = Profile.provision(
                user_id=identity.id,
                tenant_id=membership.tenant_id,
                email=identity.email or email,
                role=role,
            )
            async with self._session.begin():
                await self._profile_repository.add(profile)
        except Exception as e:
            self._probe.step_failed(
                state=ProvisioningState.CREATE_PROFILE.value,
                email=email,
                error=str(e),
            )
            await self._compensate(email)
            self._state = ProvisioningState.FAILED
            if isinstance(e, DuplicateProfileError):
                raise AlreadyMemberError(
                    "User is already a member of this tenant"
                ) from e
            raise ProfileProvisioningError(
                "Failed to create profile; the new identity was removed"
            ) from e

        return self._succeed(profile, is_new_user=True)

    async def _compensate(self, email: str) -> None:
        """Undo completed steps in reverse order using the compensation table."""
        self._enter(ProvisioningState.ROLLBACK_IDENTITY, email)
        for step, identity in reversed(self._completed):
            action = COMPENSATIONS.get(step)
            if action is None:
                continue
            try:
                await self._run_compensation(action, identity)
            except Exception as e:
                self._state = ProvisioningState.PARTIAL_FAILURE
                self._probe.compensation_failed(
                    action=action.value,
                    identity_id=identity.id.value,
                    error=str(e),
                )
                raise PartialFailureError(
                    "Profile creation failed and the new identity could not be "
                    "removed; manual reconciliation required",
                    orphaned_identity_id=identity.id.value,
                ) from e
            self._probe.compensation_succeeded(
                action=action.value, identity_id=identity.id.value
            )
        self._completed = []

    async def _run_compensation(
        self, action: CompensationAction, identity: IdentityRecord
    ) -> None:
        if action == CompensationAction.DELETE_IDENTITY:
            await self._identity_provider.delete_identity(identity.id)

    def _already_member(
        self, identity: IdentityRecord, membership: Membership
    ) -> NoReturn:
        self._state = ProvisioningState.ALREADY_MEMBER
        self._probe.already_member(
            user_id=identity.id.value, tenant_id=membership.tenant_id.value
        )
        raise AlreadyMemberError("User is already a member of this tenant")

    def _succeed(self, profile: Profile, is_new_user: bool) -> ProvisioningResult:
        self._state = ProvisioningState.SUCCEEDED
        self._probe.user_provisioned(
            user_id=profile.id.value,
            tenant_id=profile.tenant_id.value,
            role=profile.role.value,
            is_new_user=is_new_user,
        )
        return ProvisioningResult(profile=profile, is_new_user=is_new_user)
