"""Exceptions for the IAM bounded context.

Every class derives from the shared error taxonomy so the presentation
layer can map it to an HTTP status without knowing the individual type.
"""

from shared_kernel.errors import (
    Forbidden,
    NotFound,
    Unauthenticated,
    UpstreamError,
    ValidationError,
)


class InvalidCredentialError(Unauthenticated):
    """Raised when the bearer credential is missing or rejected."""

    pass


class ProfileNotFoundError(Unauthenticated):
    """Raised when a verified principal has no profile in the requested tenant.

    The principal exists at the identity provider but was never provisioned
    into a tenant, or not into the one named by the request.
    """

    pass


class AmbiguousMembershipError(ValidationError):
    """Raised when a principal with several profiles did not choose a tenant."""

    pass


class MembershipIntegrityError(UpstreamError):
    """Raised when storage returns more than one record for a single membership.

    Signals corrupted data rather than a caller mistake.
    """

    status_code = 500


class AccessDeniedError(Forbidden):
    """Raised when the access decision point denies an operation."""

    pass


class TenantNotFoundError(NotFound):
    """Raised when a tenant cannot be found by slug or id."""

    pass


class InvalidInvitationError(ValidationError):
    """Raised when an invitation names a malformed email or unknown role."""

    pass


class AlreadyMemberError(ValidationError):
    """Raised when inviting an identity that already has a profile in the tenant."""

    pass


class DuplicateProfileError(Exception):
    """Raised by profile storage when (id, tenant_id) already exists.

    The provisioning workflow translates it into ``AlreadyMemberError``.
    """

    pass


class IdentityProviderError(UpstreamError):
    """Raised when the identity provider fails or cannot be reached."""

    pass


class ProfileProvisioningError(UpstreamError):
    """Raised when storing a new profile fails and the identity was rolled back."""

    status_code = 500


class PartialFailureError(UpstreamError):
    """Raised when rolling back a newly created identity also failed.

    The identity now exists without a profile and must be reconciled by an
    operator; ``orphaned_identity_id`` names it.
    """

    status_code = 500

    def __init__(self, message: str, orphaned_identity_id: str):
        super().__init__(message)
        self.orphaned_identity_id = orphaned_identity_id
