"""Create birds table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

Creates the `birds` table: integer primary key, free-text name and species,
and a non-null, non-negative likes counter defaulting to 0.

Rollback: downgrade() drops the table (all bird data is lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the birds table. Column docs live in app/models/bird.py."""
    op.create_table(
        "birds",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(255),
            nullable=True,
            comment="Common name, e.g. 'Robin'",
        ),
        sa.Column(
            "species",
            sa.String(255),
            nullable=True,
            comment="Scientific name, e.g. 'Turdus migratorius'",
        ),
        sa.Column(
            "likes",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Like counter; only grows through PATCH /birds/{id}/like",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("likes >= 0", name="ck_birds_likes_non_negative"),
    )


def downgrade() -> None:
    """Drop the birds table."""
    op.drop_table("birds")
