"""Subscription plans shared by the iam and notes contexts.

iam owns the tenant's plan; notes reads it to enforce resource quotas.
"""

from __future__ import annotations

from enum import StrEnum


class TenantPlan(StrEnum):
    """Subscription plan of a tenant."""

    FREE = "free"
    PRO = "pro"
