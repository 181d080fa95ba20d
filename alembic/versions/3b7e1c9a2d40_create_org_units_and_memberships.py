"""create org_units and memberships

Revision ID: 3b7e1c9a2d40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b7e1c9a2d40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "org_units",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "parent_id",
            sa.String(length=64),
            sa.ForeignKey("org_units.id"),
            nullable=True,
        ),
        sa.Column(
            "ancestors",
            postgresql.ARRAY(sa.String(length=64)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_org_units_parent_id", "org_units", ["parent_id"])
    op.create_index(
        "ix_org_units_ancestors",
        "org_units",
        ["ancestors"],
        postgresql_using="gin",
    )

    op.create_table(
        "memberships",
        sa.Column("user_id", sa.String(length=64), primary_key=True),
        sa.Column(
            "org_unit_id",
            sa.String(length=64),
            sa.ForeignKey("org_units.id"),
            primary_key=True,
        ),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_memberships_org_unit_id", "memberships", ["org_unit_id"])


def downgrade() -> None:
    op.drop_index("ix_memberships_org_unit_id", table_name="memberships")
    op.drop_table("memberships")
    op.drop_index("ix_org_units_ancestors", table_name="org_units")
    op.drop_index("ix_org_units_parent_id", table_name="org_units")
    op.drop_table("org_units")
