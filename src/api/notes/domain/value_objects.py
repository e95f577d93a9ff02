"""Value objects for the notes domain."""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID


@dataclass(frozen=True)
class NoteId:
    """Identifier for a Note.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> NoteId:
        """Generate a new NoteId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> NoteId:
        """Create NoteId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid NoteId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class NoteScope:
    """The slice of notes a caller may see and touch.

    Reads are confined to ``tenant_id``. Updates and deletes are further
    confined to notes whose creator is ``user_id``. Storage adapters must
    apply these predicates to every query; there is no other isolation
    mechanism.
    """

    tenant_id: str
    user_id: str

    def __post_init__(self) -> None:
        if not self.tenant_id or not self.user_id:
            raise ValueError("NoteScope requires both tenant_id and user_id")

    def can_read(self, tenant_id: str) -> bool:
        """Check whether a note of this tenant is visible."""
        return tenant_id == self.tenant_id

    def can_modify(self, tenant_id: str, user_id: str) -> bool:
        """Check whether a note of this tenant and creator may be changed."""
        return self.can_read(tenant_id) and user_id == self.user_id
