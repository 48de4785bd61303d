"""Initial schema - license, license_grant, license_staff, license_pause.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "license",
        sa.Column("key", sa.String(255), primary_key=True),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("owner_tag", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    # One license per owner.
    op.create_index("ix_license_owner_id", "license", ["owner_id"], unique=True)

    op.create_table(
        "license_grant",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column(
            "license_key",
            sa.String(255),
            sa.ForeignKey("license.key", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("scope", sa.String(255), nullable=False, server_default="*ALL*"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "license_key", "subject", "scope", name="uq_license_grant_subject_scope"
        ),
    )
    op.create_index(
        "ix_license_grant_license_subject", "license_grant", ["license_key", "subject"]
    )

    op.create_table(
        "license_staff",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column(
            "license_key",
            sa.String(255),
            sa.ForeignKey("license.key", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column("delegate_id", sa.String(64), nullable=False),
        sa.Column("delegate_tag", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("granted_by", sa.String(64), nullable=False),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("license_key", "delegate_id", name="uq_license_staff_delegate"),
        sa.CheckConstraint("role IN ('admin', 'helper')", name="ck_license_staff_role"),
    )
    op.create_index("ix_license_staff_delegate_id", "license_staff", ["delegate_id"])

    op.create_table(
        "license_pause",
        sa.Column(
            "license_key",
            sa.String(255),
            sa.ForeignKey("license.key", ondelete="CASCADE", onupdate="CASCADE"),
            primary_key=True,
        ),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column("owner_tag", sa.String(255), nullable=False),
        sa.Column("paused_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("license_pause")
    op.drop_index("ix_license_staff_delegate_id", table_name="license_staff")
    op.drop_table("license_staff")
    op.drop_index("ix_license_grant_license_subject", table_name="license_grant")
    op.drop_table("license_grant")
    op.drop_index("ix_license_owner_id", table_name="license")
    op.drop_table("license")
