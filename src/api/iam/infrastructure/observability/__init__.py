"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository and identity provider operations following
Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.identity_provider_probe import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from iam.infrastructure.observability.repository_probe import (
    DefaultProfileRepositoryProbe,
    DefaultTenantRepositoryProbe,
    ProfileRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "IdentityProviderProbe",
    "DefaultIdentityProviderProbe",
    "ProfileRepositoryProbe",
    "DefaultProfileRepositoryProbe",
    "TenantRepositoryProbe",
    "DefaultTenantRepositoryProbe",
]
