"""SQLAlchemy ORM model for the tenants table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Tenants represent customer organizations and are the top-level isolation
    boundary. Slugs are globally unique.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    slug: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    plan: Mapped[str] = mapped_column(
        String(16), nullable=False, default="free", server_default="free"
    )

    profiles = relationship("ProfileModel", back_populates="tenant")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, slug={self.slug}, plan={self.plan})>"
