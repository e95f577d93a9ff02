"""Unit tests for PrincipalResolver and MembershipResolver."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from iam.application.observability import AuthenticationProbe
from iam.application.services import MembershipResolver, PrincipalResolver
from iam.application.value_objects import Principal
from iam.domain.aggregates import Profile
from iam.domain.value_objects import Role, UserId
from iam.ports.exceptions import (
    AmbiguousMembershipError,
    IdentityProviderError,
    InvalidCredentialError,
    MembershipIntegrityError,
    ProfileNotFoundError,
)
from iam.ports.identity_provider import IdentityRecord, IPrincipalVerifier
from iam.ports.repositories import IProfileRepository, ITenantRepository

USER_ID = UserId("3f6c1f5e-0c1a-4d1e-9a49-6c1d2e9b0a11")


@pytest.fixture
def probe():
    return MagicMock(spec=AuthenticationProbe)


@pytest.fixture
def verifier():
    return create_autospec(IPrincipalVerifier, instance=True)


@pytest.fixture
def principal_resolver(verifier, probe):
    return PrincipalResolver(verifier=verifier, probe=probe)


@pytest.fixture
def profile_repo():
    return create_autospec(IProfileRepository, instance=True)


@pytest.fixture
def tenant_repo():
    return create_autospec(ITenantRepository, instance=True)


@pytest.fixture
def membership_resolver(profile_repo, tenant_repo, probe):
    return MembershipResolver(
        profile_repository=profile_repo, tenant_repository=tenant_repo, probe=probe
    )


@pytest.fixture
def principal():
    return Principal(id=USER_ID, email="alice@acme.test")


def profile_in(tenant, role=Role.ADMIN):
    return Profile(id=USER_ID, tenant_id=tenant.id, email="alice@acme.test", role=role)


class TestPrincipalResolver:
    """Tests for PrincipalResolver.resolve()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credential", [None, "", "   "])
    async def test_missing_credential_is_rejected(
        self, principal_resolver, verifier, credential
    ):
        with pytest.raises(InvalidCredentialError, match="Missing authorization"):
            await principal_resolver.resolve(credential)
        verifier.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_verified_credential_yields_principal(
        self, principal_resolver, verifier, probe
    ):
        verifier.verify = AsyncMock(
            return_value=IdentityRecord(id=USER_ID, email="alice@acme.test")
        )

        principal = await principal_resolver.resolve("token-abc")

        assert principal == Principal(id=USER_ID, email="alice@acme.test")
        verifier.verify.assert_awaited_once_with("token-abc")
        probe.principal_resolved.assert_called_once_with(user_id=USER_ID.value)

    @pytest.mark.asyncio
    async def test_rejected_credential_propagates(
        self, principal_resolver, verifier, probe
    ):
        verifier.verify = AsyncMock(side_effect=InvalidCredentialError("Invalid token"))

        with pytest.raises(InvalidCredentialError):
            await principal_resolver.resolve("bad")
        probe.authentication_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_provider_outage_is_not_reported_as_bad_credential(
        self, principal_resolver, verifier, probe
    ):
        verifier.verify = AsyncMock(side_effect=IdentityProviderError("timeout"))

        with pytest.raises(IdentityProviderError):
            await principal_resolver.resolve("token")
        probe.authentication_failed.assert_not_called()


class TestMembershipResolver:
    """Tests for MembershipResolver.resolve()."""

    @pytest.mark.asyncio
    async def test_no_profile_is_unauthenticated(
        self, membership_resolver, profile_repo, principal
    ):
        profile_repo.list_by_user = AsyncMock(return_value=[])

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await membership_resolver.resolve(principal)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_single_profile_resolves_without_slug(
        self, membership_resolver, profile_repo, principal, tenant
    ):
        profile = profile_in(tenant)
        profile_repo.list_by_user = AsyncMock(return_value=[profile])
        profile_repo.get_membership = AsyncMock(return_value=(profile, tenant))

        membership = await membership_resolver.resolve(principal)

        assert membership.tenant == tenant
        assert membership.profile == profile
        assert membership.principal == principal
        profile_repo.get_membership.assert_awaited_once_with(USER_ID, tenant.id)

    @pytest.mark.asyncio
    async def test_several_profiles_without_slug_is_ambiguous(
        self, membership_resolver, profile_repo, principal, build_tenant
    ):
        acme, globex = build_tenant("acme"), build_tenant("globex")
        profile_repo.list_by_user = AsyncMock(
            return_value=[profile_in(acme), profile_in(globex)]
        )

        with pytest.raises(AmbiguousMembershipError) as exc_info:
            await membership_resolver.resolve(principal)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_slug_selects_among_several_profiles(
        self, membership_resolver, profile_repo, tenant_repo, principal, build_tenant
    ):
        acme, globex = build_tenant("acme"), build_tenant("globex")
        globex_profile = profile_in(globex, role=Role.MEMBER)
        profile_repo.list_by_user = AsyncMock(
            return_value=[profile_in(acme), globex_profile]
        )
        tenant_repo.get_by_slug = AsyncMock(return_value=globex)
        profile_repo.get_membership = AsyncMock(return_value=(globex_profile, globex))

        membership = await membership_resolver.resolve(principal, tenant_slug="globex")

        assert membership.tenant_id == globex.id
        assert membership.role == Role.MEMBER

    @pytest.mark.asyncio
    async def test_slug_of_foreign_tenant_is_unauthenticated(
        self, membership_resolver, profile_repo, tenant_repo, principal, build_tenant
    ):
        acme, globex = build_tenant("acme"), build_tenant("globex")
        profile_repo.list_by_user = AsyncMock(return_value=[profile_in(acme)])
        tenant_repo.get_by_slug = AsyncMock(return_value=globex)

        with pytest.raises(ProfileNotFoundError):
            await membership_resolver.resolve(principal, tenant_slug="globex")
        profile_repo.get_membership.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", ["unknown", "Not A Slug"])
    async def test_unknown_slug_is_unauthenticated(
        self, membership_resolver, profile_repo, tenant_repo, principal, tenant, slug
    ):
        profile_repo.list_by_user = AsyncMock(return_value=[profile_in(tenant)])
        tenant_repo.get_by_slug = AsyncMock(return_value=None)

        with pytest.raises(ProfileNotFoundError):
            await membership_resolver.resolve(principal, tenant_slug=slug)

    @pytest.mark.asyncio
    async def test_missing_tenant_row_is_unauthenticated(
        self, membership_resolver, profile_repo, principal, tenant
    ):
        profile_repo.list_by_user = AsyncMock(return_value=[profile_in(tenant)])
        profile_repo.get_membership = AsyncMock(return_value=None)

        with pytest.raises(ProfileNotFoundError):
            await membership_resolver.resolve(principal)

    @pytest.mark.asyncio
    async def test_integrity_violation_propagates(
        self, membership_resolver, profile_repo, principal, tenant
    ):
        profile_repo.list_by_user = AsyncMock(return_value=[profile_in(tenant)])
        profile_repo.get_membership = AsyncMock(
            side_effect=MembershipIntegrityError("duplicate membership rows")
        )

        with pytest.raises(MembershipIntegrityError):
            await membership_resolver.resolve(principal)
