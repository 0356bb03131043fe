"""add profile fields

Admins get the same bio and profile picture as users. Both tables record
when the display name last changed, for the rename cooldown.

Revision ID: 9c4d81e2f6a3
Revises: 3f1c2a9d7b4e
Create Date: 2026-10-17 15:40:12.904117

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "9c4d81e2f6a3"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b4e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column("admins", sa.Column("bio", sa.Text(), nullable=True))
    op.add_column("admins", sa.Column("profile_picture_url", sa.Text(), nullable=True))

    for table in ("users", "admins"):
        op.add_column(
            table,
            sa.Column(
                "display_name_changed_at",
                postgresql.TIMESTAMP(timezone=True),
                nullable=True,
            ),
        )

    # Account search matches username and display name
    op.create_index("idx_users_display_name", "users", ["display_name"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_display_name", table_name="users")

    for table in ("admins", "users"):
        op.drop_column(table, "display_name_changed_at")

    op.drop_column("admins", "profile_picture_url")
    op.drop_column("admins", "bio")
