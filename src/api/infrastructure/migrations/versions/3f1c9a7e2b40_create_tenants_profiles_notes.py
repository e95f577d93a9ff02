"""create tenants, profiles and notes tables

Tenants are the isolation boundary. A profile binds an identity provider
account to a tenant with a role; the composite key lets one account join
several tenants. Notes belong to a tenant and record their creator.

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("slug", sa.String(length=63), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "plan", sa.String(length=16), nullable=False, server_default="free"
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tenants"),
        sa.UniqueConstraint("slug", name="uq_tenants_slug"),
        sa.CheckConstraint("plan IN ('free', 'pro')", name="ck_tenants_plan"),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", "tenant_id", name="pk_profiles"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_profiles_tenant_id_tenants",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("role IN ('admin', 'member')", name="ck_profiles_role"),
    )
    op.create_index("ix_profiles_tenant_id", "profiles", ["tenant_id"])

    op.create_table(
        "notes",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_notes"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_notes_tenant_id_tenants",
            ondelete="CASCADE",
        ),
    )
    # Listing is always per tenant, newest first
    op.create_index(
        "ix_notes_tenant_id_updated_at", "notes", ["tenant_id", "updated_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_notes_tenant_id_updated_at", table_name="notes")
    op.drop_table("notes")
    op.drop_index("ix_profiles_tenant_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_table("tenants")
