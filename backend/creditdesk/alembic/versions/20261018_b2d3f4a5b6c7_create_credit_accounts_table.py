"""create credit_accounts table

Revision ID: b2d3f4a5b6c7
Revises: a1c2e3f4a5b6
Create Date: 2026-10-18 00:01:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "b2d3f4a5b6c7"
down_revision = "a1c2e3f4a5b6"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "credit_accounts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("is_daily", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("daily_credits_assigned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("today_used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("usage_date", sa.Date(), nullable=True),
        sa.Column("monthly_credits_assigned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("used_credit", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("daily_credits_assigned >= 0", name="ck_credit_accounts_daily_assigned"),
        sa.CheckConstraint("monthly_credits_assigned >= 0", name="ck_credit_accounts_monthly_assigned"),
        sa.CheckConstraint("today_used >= 0", name="ck_credit_accounts_today_used"),
        sa.CheckConstraint("used_credit >= 0", name="ck_credit_accounts_used_credit"),
    )
    op.create_index("ix_credit_accounts_user_id", "credit_accounts", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_credit_accounts_user_id", table_name="credit_accounts")
    op.drop_table("credit_accounts")
