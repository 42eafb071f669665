"""add authoritative invoices.amount_cents

Legacy amount columns stay in place; rows without amount_cents are
normalized on read.

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 00:00:02
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0002"
down_revision = "20261017_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("invoices") as batch_op:
        batch_op.add_column(sa.Column("amount_cents", sa.Integer(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("invoices") as batch_op:
        batch_op.drop_column("amount_cents")
