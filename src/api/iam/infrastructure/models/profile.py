"""SQLAlchemy ORM model for the profiles table."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class ProfileModel(Base, TimestampMixin):
    """ORM model for profiles table.

    A profile binds an identity provider account to a tenant with a role.
    The composite primary key allows one account to join several tenants,
    once each.
    """

    __tablename__ = "profiles"

    # Identity provider account id (UUID at GoTrue), not a ULID
    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)

    tenant = relationship("TenantModel", back_populates="profiles")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ProfileModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"role={self.role})>"
        )
