"""Create the social schema.

Creates users, profiles, posts, comments, likes, follows and friendships.
Every table that references a profile deletes its rows together with the
profile (ON DELETE CASCADE).
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251009_create_social_schema"
down_revision = None
branch_labels = None
depends_on = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(length=36), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=True,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=True,
    )


def _profile_fk(name: str, index: bool = True) -> sa.Column:
    return sa.Column(
        name,
        sa.String(length=36),
        sa.ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=index,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("avatar_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)

    op.create_table(
        "posts",
        _id_column(),
        _profile_fk("user_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False, server_default=""),
        _created_at(),
        _updated_at(),
    )
    op.create_index("idx_posts_created_at", "posts", ["created_at"])

    op.create_table(
        "comments",
        _id_column(),
        sa.Column(
            "post_id",
            sa.String(length=36),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        _profile_fk("user_id"),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
    )

    op.create_table(
        "likes",
        _id_column(),
        sa.Column(
            "post_id",
            sa.String(length=36),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        _profile_fk("user_id"),
        _created_at(),
        sa.UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
    )

    op.create_table(
        "follows",
        _id_column(),
        _profile_fk("follower_id"),
        _profile_fk("following_id"),
        _created_at(),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id <> following_id", name="check_follows_not_self"),
    )

    op.create_table(
        "friendships",
        _id_column(),
        _profile_fk("user_id_1"),
        _profile_fk("user_id_2"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        _profile_fk("requested_by", index=False),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="check_friendship_status",
        ),
        sa.CheckConstraint("user_id_1 <> user_id_2", name="check_friendship_not_self"),
    )


def downgrade() -> None:
    op.drop_table("friendships")
    op.drop_table("follows")
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_profiles_username", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
