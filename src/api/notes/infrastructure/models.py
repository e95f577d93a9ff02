"""SQLAlchemy ORM model for the notes table."""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class NoteModel(Base, TimestampMixin):
    """ORM model for notes table.

    ``tenant_id`` references tenants so that deleting a tenant removes its
    notes. ``user_id`` is the creator's identity provider account id; it is
    not a foreign key because a profile may be removed while its notes stay.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )

    __table_args__ = (
        Index("ix_notes_tenant_id_updated_at", "tenant_id", "updated_at"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<NoteModel(id={self.id}, tenant_id={self.tenant_id})>"
