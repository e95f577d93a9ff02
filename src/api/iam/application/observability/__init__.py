"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented
Observability patterns.
"""

from iam.application.observability.access_decision_probe import (
    AccessDecisionProbe,
    DefaultAccessDecisionProbe,
)
from iam.application.observability.authentication_probe import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.observability.provisioning_probe import (
    DefaultProvisioningProbe,
    ProvisioningProbe,
)
from iam.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "AccessDecisionProbe",
    "DefaultAccessDecisionProbe",
    "AuthenticationProbe",
    "DefaultAuthenticationProbe",
    "ProvisioningProbe",
    "DefaultProvisioningProbe",
    "TenantServiceProbe",
    "DefaultTenantServiceProbe",
]
