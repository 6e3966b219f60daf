"""Create link_requests table

Revision ID: 002
Revises: 001
Create Date: 2024-01-02 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "link_requests",
        sa.Column("token", sa.String(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("request_type", sa.String(), nullable=False),
        sa.Column("request_value", sa.Text(), nullable=False),
        sa.Column("generated_link", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("request_type IN ('stars', 'nft')", name="ck_link_requests_type"),
        sa.ForeignKeyConstraint(["user_id"], ["users.telegram_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("token"),
    )
    op.create_index(op.f("ix_link_requests_token"), "link_requests", ["token"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_link_requests_token"), table_name="link_requests")
    op.drop_table("link_requests")
