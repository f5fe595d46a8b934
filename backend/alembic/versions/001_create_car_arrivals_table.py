"""Create car_arrivals table

Revision ID: 001
Revises: None
Create Date: 2025-03-02 00:00:00.000000+00:00

Store: car (branch label "car")
The table holds at most one row, keyed by slot = 'current'.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ("car",)
depends_on: Union[str, Sequence[str], None] = None

json_document = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "car_arrivals",
        sa.Column(
            "slot",
            sa.String(32),
            nullable=False,
            comment="Fixed key of the single current board",
        ),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("history", json_document, nullable=False),
        sa.Column("logs", json_document, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("slot"),
    )


def downgrade() -> None:
    op.drop_table("car_arrivals")
