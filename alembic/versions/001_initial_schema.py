"""Initial schema - resources, grants, groups, group members, grant inheritance.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "authorization_resource",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("resource_class", sa.String(64), nullable=False),
        sa.Column("resource_identifier", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ux_authorization_resource_item",
        "authorization_resource",
        ["resource_class", "resource_identifier"],
        unique=True,
        postgresql_where=sa.text("resource_identifier IS NOT NULL"),
    )
    # One collection resource per class.
    op.create_index(
        "ux_authorization_resource_collection",
        "authorization_resource",
        ["resource_class"],
        unique=True,
        postgresql_where=sa.text("resource_identifier IS NULL"),
    )
    op.create_index(
        "ix_authorization_resource_created_at", "authorization_resource", ["created_at"]
    )

    op.create_table(
        "authorization_group",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    op.create_table(
        "resource_action_grant",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "resource_id",
            sa.UUID(),
            sa.ForeignKey("authorization_resource.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("user_identifier", sa.String(255), nullable=True),
        sa.Column(
            "group_id",
            sa.UUID(),
            sa.ForeignKey("authorization_group.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("dynamic_group_identifier", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "num_nonnulls(user_identifier, group_id, dynamic_group_identifier) = 1",
            name="ck_resource_action_grant_one_holder",
        ),
    )
    op.create_index("ix_resource_action_grant_resource_id", "resource_action_grant", ["resource_id"])
    op.create_index(
        "ix_resource_action_grant_user_identifier", "resource_action_grant", ["user_identifier"]
    )
    op.create_index("ix_resource_action_grant_group_id", "resource_action_grant", ["group_id"])
    op.create_index(
        "ix_resource_action_grant_dynamic_group_identifier",
        "resource_action_grant",
        ["dynamic_group_identifier"],
    )

    op.create_table(
        "authorization_group_member",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "group_id",
            sa.UUID(),
            sa.ForeignKey("authorization_group.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_identifier", sa.String(255), nullable=True),
        sa.Column(
            "child_group_id",
            sa.UUID(),
            sa.ForeignKey("authorization_group.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint(
            "num_nonnulls(user_identifier, child_group_id) = 1",
            name="ck_authorization_group_member_one_member",
        ),
        sa.CheckConstraint(
            "child_group_id IS NULL OR child_group_id <> group_id",
            name="ck_authorization_group_member_not_self",
        ),
    )
    op.create_index(
        "ix_authorization_group_member_group_id", "authorization_group_member", ["group_id"]
    )
    op.create_index(
        "ix_authorization_group_member_child_group_id",
        "authorization_group_member",
        ["child_group_id"],
    )
    op.create_index(
        "ix_authorization_group_member_user_identifier",
        "authorization_group_member",
        ["user_identifier"],
    )

    op.create_table(
        "grant_inheritance",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "source_resource_id",
            sa.UUID(),
            sa.ForeignKey("authorization_resource.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "target_resource_id",
            sa.UUID(),
            sa.ForeignKey("authorization_resource.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "source_resource_id", "target_resource_id", name="uq_grant_inheritance_edge"
        ),
        sa.CheckConstraint(
            "source_resource_id <> target_resource_id",
            name="ck_grant_inheritance_not_self",
        ),
    )
    op.create_index(
        "ix_grant_inheritance_target_resource_id", "grant_inheritance", ["target_resource_id"]
    )


def downgrade() -> None:
    op.drop_table("grant_inheritance")
    op.drop_table("authorization_group_member")
    op.drop_table("resource_action_grant")
    op.drop_table("authorization_group")
    op.drop_table("authorization_resource")
