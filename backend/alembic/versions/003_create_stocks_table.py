"""Create stocks table

Revision ID: 003
Revises: None
Create Date: 2025-03-02 00:00:00.000000+00:00

Store: stock (branch label "stock")
Every column but id/created_at is optional; the purchase sheet sends
whatever it has.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "003"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ("stock",)
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stocks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("last_update", sa.Text(), nullable=True),
        sa.Column("date", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=True),
        sa.Column("bags", sa.Float(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("car_no", sa.Text(), nullable=True),
        sa.Column("party_name", sa.Text(), nullable=True),
        sa.Column("unloader_name", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stocks_date", "stocks", ["date"])


def downgrade() -> None:
    op.drop_index("ix_stocks_date", table_name="stocks")
    op.drop_table("stocks")
