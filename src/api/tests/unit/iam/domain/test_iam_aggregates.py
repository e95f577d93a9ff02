"""Unit tests for Tenant and Profile aggregates and IAM value objects."""

import pytest

from iam.domain.aggregates import Profile, Tenant
from iam.domain.value_objects import Role, TenantId, TenantPlan, TenantSlug, UserId


class TestTenantSlug:
    """Tests for TenantSlug validation."""

    @pytest.mark.parametrize("value", ["acme", "acme-corp", "a1", "team-42-x"])
    def test_accepts_url_safe_slugs(self, value):
        assert TenantSlug(value).value == value

    @pytest.mark.parametrize(
        "value", ["", "Acme", "acme_corp", "-acme", "acme-", "acme--corp", "a b"]
    )
    def test_rejects_invalid_slugs(self, value):
        with pytest.raises(ValueError):
            TenantSlug(value)

    def test_rejects_overlong_slug(self):
        with pytest.raises(ValueError):
            TenantSlug("a" * 64)


class TestUserId:
    def test_rejects_blank(self):
        with pytest.raises(ValueError, match="UserId cannot be empty"):
            UserId("   ")


class TestTenantAggregate:
    """Tests for Tenant plan transitions."""

    def test_create_starts_on_free_plan(self):
        tenant = Tenant.create(slug="acme", name="  Acme Corp ")

        assert tenant.plan == TenantPlan.FREE
        assert tenant.name == "Acme Corp"
        assert not tenant.is_pro

    def test_create_rejects_blank_name(self):
        with pytest.raises(ValueError):
            Tenant.create(slug="acme", name=" ")

    def test_upgrade_to_pro_changes_plan(self):
        tenant = Tenant.create(slug="acme", name="Acme")

        assert tenant.upgrade_to_pro() is True
        assert tenant.is_pro

    def test_upgrade_is_idempotent(self):
        tenant = Tenant.create(slug="acme", name="Acme")
        tenant.upgrade_to_pro()

        assert tenant.upgrade_to_pro() is False
        assert tenant.plan == TenantPlan.PRO


class TestProfileAggregate:
    """Tests for Profile provisioning."""

    def test_provision_defaults_to_member(self):
        tenant_id = TenantId.generate()
        profile = Profile.provision(
            user_id=UserId("user-1"), tenant_id=tenant_id, email="bob@acme.test"
        )

        assert profile.role == Role.MEMBER
        assert not profile.is_admin()
        assert profile.belongs_to(tenant_id)
        assert not profile.belongs_to(TenantId.generate())

    def test_provision_rejects_invalid_email(self):
        with pytest.raises(ValueError, match="Invalid email"):
            Profile.provision(
                user_id=UserId("user-1"),
                tenant_id=TenantId.generate(),
                email="not-an-email",
            )
