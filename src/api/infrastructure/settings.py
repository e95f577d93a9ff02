"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        NOTES_DB_HOST: Database host (default: localhost)
        NOTES_DB_PORT: Database port (default: 5432)
        NOTES_DB_DATABASE: Database name (default: notes)
        NOTES_DB_USERNAME: Database user (default: notes)
        NOTES_DB_PASSWORD: Database password (required in production)
        NOTES_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        NOTES_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTES_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="notes", description="Database name")
    username: str = Field(default="notes", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Bearer token verification settings.

    Environment variables:
        NOTES_AUTH_ENVIRONMENT: dev or prod (default: dev)
        NOTES_AUTH_JWT_SECRET: HS256 secret shared with the identity provider
        NOTES_AUTH_JWT_AUDIENCE: Expected audience claim (default: authenticated)
        NOTES_AUTH_JWT_ISSUER: Expected issuer claim (optional)
        NOTES_AUTH_VERIFICATION_MODE: jwt (local) or provider (remote lookup)
        NOTES_AUTH_USER_ID_CLAIM: Claim carrying the principal ID (default: sub)
        NOTES_AUTH_EMAIL_CLAIM: Claim carrying the principal email (default: email)
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTES_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["dev", "prod"] = Field(
        default="dev", description="Deployment environment"
    )
    jwt_secret: SecretStr = Field(
        default=SecretStr(""),
        description="HS256 signing secret of the identity provider",
    )
    jwt_audience: str = Field(
        default="authenticated", description="Expected audience claim"
    )
    jwt_issuer: str | None = Field(
        default=None, description="Expected issuer claim (not checked when unset)"
    )
    verification_mode: Literal["jwt", "provider"] = Field(
        default="jwt",
        description="Verify tokens locally or by asking the identity provider",
    )
    user_id_claim: str = Field(default="sub", description="Principal ID claim")
    email_claim: str = Field(default="email", description="Principal email claim")

    @model_validator(mode="after")
    def validate_prod_secret(self) -> "AuthSettings":
        """Refuse to run in production with local verification and no secret."""
        if (
            self.environment == "prod"
            and self.verification_mode == "jwt"
            and not self.jwt_secret.get_secret_value()
        ):
            raise ValueError(
                "NOTES_AUTH_JWT_SECRET must be set in production "
                "when verification_mode is 'jwt'"
            )
        return self


class IdentityProviderSettings(BaseSettings):
    """Identity provider (GoTrue-compatible admin API) settings.

    Environment variables:
        NOTES_IDP_URL: Base URL of the identity provider
        NOTES_IDP_SERVICE_ROLE_KEY: Service role key for admin calls
        NOTES_IDP_TIMEOUT_SECONDS: Request timeout (default: 10)
        NOTES_IDP_INVITE_DEFAULT_PASSWORD: Credential given to invited users
        NOTES_IDP_LOOKUP_PAGE_SIZE: Page size for email lookups (default: 1000)
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTES_IDP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="http://localhost:9999", description="Provider URL")
    service_role_key: SecretStr = Field(
        default=SecretStr(""), description="Service role key for admin calls"
    )
    timeout_seconds: float = Field(
        default=10.0, description="Request timeout in seconds", gt=0
    )
    invite_default_password: SecretStr = Field(
        default=SecretStr("password"),
        description="Known default credential for newly invited identities",
    )
    lookup_page_size: int = Field(
        default=1000, description="Page size for email lookups", ge=1, le=1000
    )


class CORSSettings(BaseSettings):
    """Cross-origin settings.

    Defaults are fully permissive; every response carries the headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTES_CORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(
        default_factory=lambda: ["Content-Type", "Authorization", "X-Tenant-Slug"]
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenant Notes API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get bearer token settings."""
        return get_auth_settings()

    @property
    def identity_provider(self) -> IdentityProviderSettings:
        """Get identity provider settings."""
        return get_identity_provider_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached bearer token settings."""
    return AuthSettings()


@lru_cache
def get_identity_provider_settings() -> IdentityProviderSettings:
    """Get cached identity provider settings."""
    return IdentityProviderSettings()


@lru_cache
def get_cors_settings() -> CORSSettings:
    """Get cached CORS settings."""
    return CORSSettings()
