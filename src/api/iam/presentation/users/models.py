"""Pydantic models for user invitation requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.application.services import ProvisioningResult
from iam.domain.aggregates import Profile
from iam.domain.value_objects import Role


class InviteUserRequest(BaseModel):
    """Request model for inviting a user into the caller's tenant.

    Email syntax and role are validated by the provisioning workflow so
    that failures report the same messages regardless of entry point.
    """

    email: str | None = Field(default=None, description="Email address of the invitee")
    role: str | None = Field(default=None, description="admin or member (default)")


class ProfileResponse(BaseModel):
    """Response model for a profile."""

    id: str = Field(..., description="Identity provider account ID")
    email: str
    role: Role
    tenant_id: str

    @classmethod
    def from_domain(cls, profile: Profile) -> ProfileResponse:
        """Convert domain Profile aggregate to API response."""
        return cls(
            id=profile.id.value,
            email=profile.email,
            role=profile.role,
            tenant_id=profile.tenant_id.value,
        )


class InviteUserResponse(BaseModel):
    """Response model for a completed invitation."""

    success: bool = True
    message: str
    user: ProfileResponse
    is_new_user: bool

    @classmethod
    def from_result(cls, result: ProvisioningResult) -> InviteUserResponse:
        return cls(
            message=result.message,
            user=ProfileResponse.from_domain(result.profile),
            is_new_user=result.is_new_user,
        )
