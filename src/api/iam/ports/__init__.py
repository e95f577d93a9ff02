"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and the identity provider
without specifying implementation details. This allows for dependency
inversion and makes the application layer independent of infrastructure.
"""

from iam.ports.identity_provider import (
    IdentityRecord,
    IIdentityProvider,
    IPrincipalVerifier,
)
from iam.ports.repositories import IProfileRepository, ITenantRepository

__all__ = [
    "IIdentityProvider",
    "IPrincipalVerifier",
    "IProfileRepository",
    "ITenantRepository",
    "IdentityRecord",
]
