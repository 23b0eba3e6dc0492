"""Add family trees, memorial profiles and life events.

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "202610190001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "family_trees",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("home_person_id", sa.String(length=96), nullable=True),
        sa.Column("member_ids_json", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_family_trees_user_id", "family_trees", ["user_id"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=96), nullable=False),
        sa.Column("tree_id", sa.String(length=64), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("birth_year", sa.String(length=16), nullable=False),
        sa.Column("death_year", sa.String(length=16), nullable=True),
        sa.Column("image_url", sa.String(length=2048), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("is_memorial", sa.Boolean(), nullable=False),
        sa.Column("memories_json", sa.Text(), nullable=False),
        sa.Column("sources_json", sa.Text(), nullable=False),
        sa.Column("parent_ids_json", sa.Text(), nullable=False),
        sa.Column("spouse_ids_json", sa.Text(), nullable=False),
        sa.Column("child_ids_json", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["tree_id"], ["family_trees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"])

    op.create_table(
        "life_events",
        sa.Column("id", sa.String(length=96), nullable=False),
        sa.Column("profile_id", sa.String(length=96), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("date", sa.String(length=128), nullable=False),
        sa.Column("place", sa.String(length=512), nullable=False),
        sa.Column("spouse_name", sa.String(length=255), nullable=True),
        sa.Column("media_json", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_life_events_profile_id", "life_events", ["profile_id"])


def downgrade() -> None:
    op.drop_index("ix_life_events_profile_id", table_name="life_events")
    op.drop_table("life_events")
    op.drop_index("ix_profiles_user_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_family_trees_user_id", table_name="family_trees")
    op.drop_table("family_trees")
