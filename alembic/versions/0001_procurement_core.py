"""procurement core: identities, tenders, bids, history, decisions, reviews

Revision ID: 0001_procurement_core
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_procurement_core"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    # ---------------- identities ----------------
    op.create_table(
        "employee",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("first_name", sa.String(length=50), nullable=True),
        sa.Column("last_name", sa.String(length=50), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "organization",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=8), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "organization_responsible",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organization.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("employee.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_org_responsible_org", "organization_responsible", ["organization_id"])
    op.create_index("ix_org_responsible_user", "organization_responsible", ["user_id"])

    # ---------------- tenders ----------------
    op.create_table(
        "tender",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organization.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_tender_status_name", "tender", ["status", "name"])
    op.create_index("ix_tender_org", "tender", ["organization_id"])

    op.create_table(
        "tender_history",
        sa.Column("id", sa.Uuid(), sa.ForeignKey("tender.id", ondelete="CASCADE"), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", "version"),
    )

    # ---------------- bids ----------------
    op.create_table(
        "bid",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "tender_id",
            sa.Uuid(),
            sa.ForeignKey("tender.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("author_type", sa.String(length=16), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bid_tender_status_name", "bid", ["tender_id", "status", "name"])
    op.create_index("ix_bid_author", "bid", ["author_type", "author_id"])

    op.create_table(
        "bid_history",
        sa.Column("id", sa.Uuid(), sa.ForeignKey("bid.id", ondelete="CASCADE"), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("tender_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("author_type", sa.String(length=16), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", "version"),
    )

    # ---------------- decisions / reviews ----------------
    op.create_table(
        "decision",
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bid_id", sa.Uuid(), sa.ForeignKey("bid.id", ondelete="CASCADE"), nullable=False),
        sa.Column("decision", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "bid_id"),
    )
    op.create_table(
        "review",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("bid_id", sa.Uuid(), sa.ForeignKey("bid.id", ondelete="CASCADE"), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False),
        sa.Column("author", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_review_bid_author", "review", ["bid_id", "author"])


def downgrade():
    op.drop_index("ix_review_bid_author", table_name="review")
    op.drop_table("review")
    op.drop_table("decision")
    op.drop_table("bid_history")
    op.drop_index("ix_bid_author", table_name="bid")
    op.drop_index("ix_bid_tender_status_name", table_name="bid")
    op.drop_table("bid")
    op.drop_table("tender_history")
    op.drop_index("ix_tender_org", table_name="tender")
    op.drop_index("ix_tender_status_name", table_name="tender")
    op.drop_table("tender")
    op.drop_index("ix_org_responsible_user", table_name="organization_responsible")
    op.drop_index("ix_org_responsible_org", table_name="organization_responsible")
    op.drop_table("organization_responsible")
    op.drop_table("organization")
    op.drop_table("employee")
