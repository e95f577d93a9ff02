"""Unit tests for the access decision point."""

from unittest.mock import MagicMock

import pytest

from iam.application.access import decide, enforce
from iam.application.observability import AccessDecisionProbe
from iam.application.value_objects import Operation
from iam.domain.value_objects import Role
from iam.ports.exceptions import AccessDeniedError

NOTE_OPERATIONS = [
    Operation.LIST_NOTES,
    Operation.GET_NOTE,
    Operation.CREATE_NOTE,
    Operation.UPDATE_NOTE,
    Operation.DELETE_NOTE,
    Operation.VIEW_MEMBERSHIP,
]


class TestDecide:
    """Tests for decide()."""

    @pytest.mark.parametrize("operation", NOTE_OPERATIONS)
    def test_members_may_perform_note_operations(self, member_membership, operation):
        assert decide(member_membership, operation).allowed

    def test_member_cannot_invite(self, member_membership):
        decision = decide(member_membership, Operation.INVITE_USER)

        assert not decision.allowed
        assert decision.reason == "Only admins can invite users"

    def test_admin_can_invite(self, admin_membership):
        assert decide(admin_membership, Operation.INVITE_USER).allowed

    def test_member_cannot_upgrade_own_tenant(self, member_membership):
        decision = decide(
            member_membership, Operation.UPGRADE_PLAN, tenant_slug="acme"
        )

        assert not decision.allowed
        assert decision.reason == "Only admins can upgrade plans"

    def test_admin_can_upgrade_own_tenant(self, admin_membership):
        decision = decide(admin_membership, Operation.UPGRADE_PLAN, tenant_slug="acme")
        assert decision.allowed

    def test_admin_cannot_upgrade_another_tenant(self, admin_membership):
        decision = decide(
            admin_membership, Operation.UPGRADE_PLAN, tenant_slug="globex"
        )

        assert not decision.allowed
        assert decision.reason == "Cannot change the plan of another tenant"

    def test_upgrade_without_slug_is_denied(self, admin_membership):
        assert not decide(admin_membership, Operation.UPGRADE_PLAN).allowed

    def test_role_is_checked_before_tenant(self, member_membership):
        """A member naming another tenant is told about the role first."""
        decision = decide(
            member_membership, Operation.UPGRADE_PLAN, tenant_slug="globex"
        )
        assert decision.reason == "Only admins can upgrade plans"


class TestEnforce:
    """Tests for enforce()."""

    def test_denial_raises_forbidden_and_is_observed(self, build_membership):
        membership = build_membership(role=Role.MEMBER)
        probe = MagicMock(spec=AccessDecisionProbe)

        with pytest.raises(AccessDeniedError) as exc_info:
            enforce(membership, Operation.INVITE_USER, probe=probe)

        assert exc_info.value.status_code == 403
        probe.access_denied.assert_called_once()
        probe.access_granted.assert_not_called()

    def test_grant_is_observed(self, admin_membership):
        probe = MagicMock(spec=AccessDecisionProbe)

        enforce(admin_membership, Operation.CREATE_NOTE, probe=probe)

        probe.access_granted.assert_called_once_with(
            user_id=admin_membership.user_id.value,
            tenant_id=admin_membership.tenant_id.value,
            operation="create_note",
        )
