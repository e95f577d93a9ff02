"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AuthSettings,
    CORSSettings,
    DatabaseSettings,
    IdentityProviderSettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("NOTES_DB_HOST", "db.internal")
        monkeypatch.setenv("NOTES_DB_PORT", "6543")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(password="hunter2")
        assert "hunter2" not in settings.connection_string


class TestAuthSettings:
    """Tests for bearer token settings."""

    def test_defaults_to_local_verification(self):
        settings = AuthSettings()
        assert settings.verification_mode == "jwt"
        assert settings.jwt_audience == "authenticated"
        assert settings.jwt_issuer is None

    def test_prod_requires_secret_for_local_verification(self):
        with pytest.raises(ValidationError, match="NOTES_AUTH_JWT_SECRET"):
            AuthSettings(environment="prod", jwt_secret="")

    def test_prod_without_secret_allowed_in_provider_mode(self):
        settings = AuthSettings(environment="prod", verification_mode="provider")
        assert settings.verification_mode == "provider"

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            AuthSettings(verification_mode="magic")


class TestIdentityProviderSettings:
    def test_page_size_bounded(self):
        with pytest.raises(ValidationError):
            IdentityProviderSettings(lookup_page_size=5000)


class TestCORSSettings:
    def test_tenant_header_allowed_by_default(self):
        assert "X-Tenant-Slug" in CORSSettings().allow_headers
