"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.profile import Profile
from iam.domain.aggregates.tenant import Tenant

__all__ = [
    "Profile",
    "Tenant",
]
