"""organization settings: contact number, logo and review QR links

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19 00:00:02
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("organizations", sa.Column("contact_number", sa.String(length=10), nullable=True))
    op.add_column("organizations", sa.Column("logo_url", sa.String(length=500), nullable=True))
    op.add_column("organizations", sa.Column("google_review_qr_url", sa.String(length=500), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("organizations") as batch_op:
        batch_op.drop_column("google_review_qr_url")
        batch_op.drop_column("logo_url")
        batch_op.drop_column("contact_number")
