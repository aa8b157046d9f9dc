"""create billing_entries table

Revision ID: d4f5b6c7d8e9
Revises: c3e4a5b6c7d8
Create Date: 2026-10-18 00:03:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "d4f5b6c7d8e9"
down_revision = "c3e4a5b6c7d8"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "billing_entries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("invoice_id", sa.String(length=255), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="usd"),
        sa.Column("plan_name", sa.String(length=255), nullable=False),
        sa.Column("billing_cycle", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="paid"),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invoice_id"),
    )
    op.create_index("ix_billing_entries_user_id", "billing_entries", ["user_id"], unique=False)
    op.create_index("ix_billing_entries_paid_at", "billing_entries", ["paid_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_billing_entries_paid_at", table_name="billing_entries")
    op.drop_index("ix_billing_entries_user_id", table_name="billing_entries")
    op.drop_table("billing_entries")
