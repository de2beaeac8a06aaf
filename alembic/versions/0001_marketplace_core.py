"""marketplace core schema: users, gigs, bids

Revision ID: 0001_marketplace_core
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_marketplace_core"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # gigs
    op.create_table(
        "gigs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("budget", sa.Numeric(12, 2), nullable=False),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'Open'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("budget >= 0", name="ck_gigs_budget_non_negative"),
        sa.CheckConstraint("status IN ('Open', 'Assigned')", name="ck_gigs_status"),
    )
    op.create_index("ix_gigs_status", "gigs", ["status"])
    op.create_index("ix_gigs_owner", "gigs", ["owner_id"])

    # bids
    op.create_table(
        "bids",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("gig_id", sa.Uuid(), sa.ForeignKey("gigs.id"), nullable=False),
        sa.Column("freelancer_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("freelancer_name", sa.String(length=128), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'Pending'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('Pending', 'Hired', 'Rejected')", name="ck_bids_status"),
    )
    op.create_index("ix_bids_gig_status", "bids", ["gig_id", "status"])
    op.create_index("ix_bids_freelancer", "bids", ["freelancer_id"])

    # at most one Hired bid per gig
    op.create_index(
        "uq_bids_one_hired_per_gig",
        "bids",
        ["gig_id"],
        unique=True,
        sqlite_where=sa.text("status = 'Hired'"),
        postgresql_where=sa.text("status = 'Hired'"),
    )


def downgrade():
    op.drop_index("uq_bids_one_hired_per_gig", table_name="bids")
    op.drop_index("ix_bids_freelancer", table_name="bids")
    op.drop_index("ix_bids_gig_status", table_name="bids")
    op.drop_table("bids")

    op.drop_index("ix_gigs_owner", table_name="gigs")
    op.drop_index("ix_gigs_status", table_name="gigs")
    op.drop_table("gigs")

    op.drop_table("users")
