"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

from shared_kernel.plans import TenantPlan

__all__ = ["Role", "TenantId", "TenantPlan", "TenantSlug", "UserId"]


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier of a principal, issued by the external identity provider.

    The provider owns the format (typically a UUID), so only emptiness is
    rejected here.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class TenantSlug:
    """URL-safe, globally unique handle of a tenant (e.g. ``acme``)."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) > 63 or not _SLUG_PATTERN.match(self.value):
            raise ValueError(
                f"Invalid tenant slug '{self.value}': use lowercase letters, "
                "digits and single hyphens"
            )

    def __str__(self) -> str:
        return self.value


class Role(StrEnum):
    """Role of a profile within its tenant."""

    ADMIN = "admin"
    MEMBER = "member"
