"""attendees table

Revision ID: 0001_attendees
Revises:
Create Date: 2025-10-05 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_attendees"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "attendees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("reg", sa.String(length=64), nullable=False),
        sa.Column("track", sa.String(length=16), nullable=False),
        sa.Column(
            "attended",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=True,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=True,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "track IN ('Frontend', 'Backend')", name="ck_attendees_track"
        ),
    )
    op.create_index("ix_attendees_reg_track", "attendees", ["reg", "track"])


def downgrade() -> None:
    op.drop_index("ix_attendees_reg_track", table_name="attendees")
    op.drop_table("attendees")
