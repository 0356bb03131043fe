"""SQLAlchemy table definitions for Whisper.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (Silent Messengers)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(30), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("display_name", String(100), nullable=True),
    Column("bio", Text, nullable=True),
    Column("profile_picture_url", Text, nullable=True),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("display_name_changed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_display_name", users_table.c.display_name)

# ============================================================================
# ADMINS TABLE (Whisper Listeners)
# ============================================================================
admins_table = Table(
    "admins",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(30), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("display_name", String(100), nullable=False, unique=True),
    Column("bio", Text, nullable=True),
    Column("profile_picture_url", Text, nullable=True),
    Column("role", String(30), nullable=False, server_default="admin"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column("display_name_changed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role IN ('admin', 'moderator', 'support', 'community_manager', 'super_admin')",
        name="admin_role_valid",
    ),
)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("category", String(20), nullable=False),
    Column("content", Text, nullable=False),
    Column("media_link", Text, nullable=True),
    Column("is_public", Boolean, nullable=False, server_default="true"),
    Column("recipient", String(100), nullable=True),  # Admin display name
    Column("sender_name", String(100), nullable=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column(
        "admin_id", UUID, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    ),
    Column("reaction_count", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "user_id IS NULL OR admin_id IS NULL", name="message_single_author"
    ),
    CheckConstraint(
        "is_public OR recipient IS NOT NULL", name="private_message_has_recipient"
    ),
    CheckConstraint("reaction_count >= 0", name="message_reaction_count_non_negative"),
    CheckConstraint("reply_count >= 0", name="message_reply_count_non_negative"),
)

Index("idx_messages_created_at", messages_table.c.created_at.desc())
Index("idx_messages_recipient", messages_table.c.recipient)
Index("idx_messages_user_id", messages_table.c.user_id)
Index("idx_messages_admin_id", messages_table.c.admin_id)

# ============================================================================
# REPLIES TABLE
# ============================================================================
replies_table = Table(
    "replies",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "message_id",
        UUID,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_id", UUID, ForeignKey("replies.id", ondelete="CASCADE"), nullable=True
    ),
    Column("content", Text, nullable=False),
    Column("nickname", String(100), nullable=False, server_default="Anonymous"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column(
        "admin_id", UUID, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("user_id IS NULL OR admin_id IS NULL", name="reply_single_author"),
)

Index("idx_replies_message_id", replies_table.c.message_id)
Index("idx_replies_parent_id", replies_table.c.parent_id)
Index("idx_replies_user_id", replies_table.c.user_id)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "follower_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("followee_kind", String(10), nullable=False),  # 'user' or 'admin'
    Column("followee_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "follower_id", "followee_kind", "followee_id", name="unique_follow"
    ),
    CheckConstraint("followee_kind IN ('user', 'admin')", name="followee_kind_valid"),
)

Index("idx_follows_followee", follows_table.c.followee_kind, follows_table.c.followee_id)

# ============================================================================
# REACTIONS TABLE
# ============================================================================
reactions_table = Table(
    "reactions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "message_id",
        UUID,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column(
        "admin_id", UUID, ForeignKey("admins.id", ondelete="CASCADE"), nullable=True
    ),
    Column("type", String(20), nullable=False, server_default="heart"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(user_id IS NULL) <> (admin_id IS NULL)", name="reaction_single_reactor"
    ),
    UniqueConstraint("message_id", "user_id", name="unique_user_reaction"),
    UniqueConstraint("message_id", "admin_id", name="unique_admin_reaction"),
)

Index("idx_reactions_message_id", reactions_table.c.message_id)
