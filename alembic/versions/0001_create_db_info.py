"""create db_info history table

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "db_info",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("db_name", sa.String(length=128), nullable=False),
        sa.Column("is_created", sa.Boolean(), nullable=False),
        sa.Column("mode", sa.String(length=16), nullable=False),
        sa.Column("connection_method", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_db_info_db_name", "db_info", ["db_name"])
    op.create_index("ix_db_info_name_created", "db_info", ["db_name", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_db_info_name_created", table_name="db_info")
    op.drop_index("ix_db_info_db_name", table_name="db_info")
    op.drop_table("db_info")
