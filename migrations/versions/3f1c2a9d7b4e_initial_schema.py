"""initial_schema

Create the schema for Whisper:
- Users (Silent Messengers) and Admins (Whisper Listeners), sharing one
  username namespace enforced by the application
- Messages (public, or private to a named admin until promoted)
- Replies (nested through parent_id, depth limited by the application)
- Follows (users following users or admins)
- Reactions (one heart per reactor and message)

Revision ID: 3f1c2a9d7b4e
Revises:
Create Date: 2026-10-17 09:12:44.318502

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column(
            "is_verified", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    # ========================================================================
    # ADMINS table
    # ========================================================================
    op.create_table(
        "admins",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(length=30), server_default="admin", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column(
            "is_verified", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "role IN ('admin', 'moderator', 'support', 'community_manager', 'super_admin')",
            name="admin_role_valid",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("display_name"),
    )

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_link", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("recipient", sa.String(length=100), nullable=True),
        sa.Column("sender_name", sa.String(length=100), nullable=True),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("admin_id", sa.UUID(), nullable=True),
        sa.Column("reaction_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("reply_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "user_id IS NULL OR admin_id IS NULL", name="message_single_author"
        ),
        sa.CheckConstraint(
            "is_public OR recipient IS NOT NULL",
            name="private_message_has_recipient",
        ),
        sa.CheckConstraint(
            "reaction_count >= 0", name="message_reaction_count_non_negative"
        ),
        sa.CheckConstraint("reply_count >= 0", name="message_reply_count_non_negative"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["admin_id"], ["admins.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_messages_created_at",
        "messages",
        [sa.text("created_at DESC")],
        unique=False,
    )
    op.create_index("idx_messages_recipient", "messages", ["recipient"], unique=False)
    op.create_index("idx_messages_user_id", "messages", ["user_id"], unique=False)
    op.create_index("idx_messages_admin_id", "messages", ["admin_id"], unique=False)

    # ========================================================================
    # REPLIES table (self-referencing tree)
    # ========================================================================
    op.create_table(
        "replies",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("message_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "nickname",
            sa.String(length=100),
            server_default="Anonymous",
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("admin_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "user_id IS NULL OR admin_id IS NULL", name="reply_single_author"
        ),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["replies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["admin_id"], ["admins.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_replies_message_id", "replies", ["message_id"], unique=False)
    op.create_index("idx_replies_parent_id", "replies", ["parent_id"], unique=False)
    op.create_index("idx_replies_user_id", "replies", ["user_id"], unique=False)

    # ========================================================================
    # FOLLOWS table
    # ========================================================================
    op.create_table(
        "follows",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("followee_kind", sa.String(length=10), nullable=False),
        sa.Column("followee_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "followee_kind IN ('user', 'admin')", name="followee_kind_valid"
        ),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "follower_id", "followee_kind", "followee_id", name="unique_follow"
        ),
    )
    op.create_index(
        "idx_follows_followee",
        "follows",
        ["followee_kind", "followee_id"],
        unique=False,
    )

    # ========================================================================
    # REACTIONS table
    # ========================================================================
    op.create_table(
        "reactions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("message_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("admin_id", sa.UUID(), nullable=True),
        sa.Column("type", sa.String(length=20), server_default="heart", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "(user_id IS NULL) <> (admin_id IS NULL)", name="reaction_single_reactor"
        ),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["admin_id"], ["admins.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("message_id", "user_id", name="unique_user_reaction"),
        sa.UniqueConstraint("message_id", "admin_id", name="unique_admin_reaction"),
    )
    op.create_index(
        "idx_reactions_message_id", "reactions", ["message_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_reactions_message_id", table_name="reactions")
    op.drop_table("reactions")
    op.drop_index("idx_follows_followee", table_name="follows")
    op.drop_table("follows")
    op.drop_index("idx_replies_user_id", table_name="replies")
    op.drop_index("idx_replies_parent_id", table_name="replies")
    op.drop_index("idx_replies_message_id", table_name="replies")
    op.drop_table("replies")
    op.drop_index("idx_messages_admin_id", table_name="messages")
    op.drop_index("idx_messages_user_id", table_name="messages")
    op.drop_index("idx_messages_recipient", table_name="messages")
    op.drop_index("idx_messages_created_at", table_name="messages")
    op.drop_table("messages")
    op.drop_table("admins")
    op.drop_table("users")
