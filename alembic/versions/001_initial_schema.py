"""Initial schema: users, games, versions, categories, records, links, comments.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create every table of the speedrun schema."""
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # --- Games and their versions/categories ---
    op.create_table(
        "games",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("icon_url", sa.Text(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("rules", sa.Text(), nullable=False),
        sa.Column("developer", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_games"),
    )

    op.create_table(
        "game_versions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_game_versions"),
        sa.ForeignKeyConstraint(
            ["game_id"], ["games.id"], name="fk_game_versions_game_id_games", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_game_versions_game_id", "game_versions", ["game_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.ForeignKeyConstraint(
            ["game_id"], ["games.id"], name="fk_categories_game_id_games", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_categories_game_id", "categories", ["game_id"])

    # --- Records ---
    op.create_table(
        "records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("version_id", sa.Integer(), nullable=False),
        sa.Column("record_time", sa.Time(), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), server_default="Pending", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_records"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_records_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["game_id"], ["games.id"], name="fk_records_game_id_games", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["version_id"], ["game_versions.id"], name="fk_records_version_id_game_versions", ondelete="CASCADE"
        ),
        sa.CheckConstraint("status IN ('Pending', 'Approved', 'Rejected')", name="ck_records_status"),
    )
    op.create_index("ix_records_user_id", "records", ["user_id"])
    op.create_index("ix_records_game_id", "records", ["game_id"])
    op.create_index("ix_records_version_id", "records", ["version_id"])
    # Leaderboard scans: one game, fastest first
    op.create_index("ix_records_game_time", "records", ["game_id", "record_time", "created_at"])

    op.create_table(
        "record_categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_record_categories"),
        sa.ForeignKeyConstraint(
            ["record_id"], ["records.id"], name="fk_record_categories_record_id_records", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name="fk_record_categories_category_id_categories",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("record_id", "category_id", name="uq_record_categories_pair"),
    )
    op.create_index("ix_record_categories_record_id", "record_categories", ["record_id"])
    op.create_index("ix_record_categories_category_id", "record_categories", ["category_id"])

    # --- Comments ---
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
        sa.ForeignKeyConstraint(
            ["record_id"], ["records.id"], name="fk_comments_record_id_records", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_comments_user_id_users", ondelete="CASCADE"),
    )
    op.create_index("ix_comments_record_id", "comments", ["record_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])


def downgrade() -> None:
    """Drop every table, children first."""
    op.drop_table("comments")
    op.drop_table("record_categories")
    op.drop_table("records")
    op.drop_table("categories")
    op.drop_table("game_versions")
    op.drop_table("games")
    op.drop_table("users")
