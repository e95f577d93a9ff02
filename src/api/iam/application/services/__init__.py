"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
the identity provider to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.membership_resolver import MembershipResolver
from iam.application.services.principal_resolver import PrincipalResolver
from iam.application.services.provisioning_workflow import (
    ProvisioningResult,
    ProvisioningState,
    ProvisioningWorkflow,
)
from iam.application.services.tenant_service import TenantService

__all__ = [
    "MembershipResolver",
    "PrincipalResolver",
    "ProvisioningResult",
    "ProvisioningState",
    "ProvisioningWorkflow",
    "TenantService",
]
