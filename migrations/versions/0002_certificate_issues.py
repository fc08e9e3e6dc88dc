"""certificate issuance log

Revision ID: 0002_certificate_issues
Revises: 0001_attendees
Create Date: 2025-10-05 00:10:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0002_certificate_issues"
down_revision = "0001_attendees"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # No unique constraint: repeat requests append repeat rows.
    op.create_table(
        "certificate_issues",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("reg", sa.String(length=64), nullable=False),
        sa.Column("track", sa.String(length=16), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_certificate_issues_reg", "certificate_issues", ["reg"]
    )


def downgrade() -> None:
    op.drop_index("ix_certificate_issues_reg", table_name="certificate_issues")
    op.drop_table("certificate_issues")
