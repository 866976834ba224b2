"""Create saved_ipis table

Revision ID: 001
Revises:
Create Date: 2025-12-16 16:06:37.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "saved_ipis",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("ipi_number", sa.String(11), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "type IN ('writer', 'publisher', 'performer')", name="ck_saved_ipis_type"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_saved_ipis_name"), "saved_ipis", ["name"])
    op.create_index(op.f("ix_saved_ipis_type"), "saved_ipis", ["type"])
    op.create_index(op.f("ix_saved_ipis_created_at"), "saved_ipis", ["created_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_saved_ipis_created_at"), table_name="saved_ipis")
    op.drop_index(op.f("ix_saved_ipis_type"), table_name="saved_ipis")
    op.drop_index(op.f("ix_saved_ipis_name"), table_name="saved_ipis")
    op.drop_table("saved_ipis")
