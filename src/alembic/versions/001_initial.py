"""Initial schema: users, projects, join requests, collaborations, reactions

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

AutoString = sqlmodel.sql.sqltypes.AutoString


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", AutoString(length=30), nullable=False),
        sa.Column("name", AutoString(length=100), nullable=False),
        sa.Column("email", AutoString(length=255), nullable=False),
        sa.Column("profile_photo", AutoString(length=500), nullable=True),
        sa.Column("summary", AutoString(length=1000), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title", AutoString(length=200), nullable=False),
        sa.Column("slug", AutoString(length=120), nullable=False),
        sa.Column("description", AutoString(length=5000), nullable=False),
        sa.Column("domain", AutoString(length=100), nullable=False),
        sa.Column(
            "tech_stack",
            postgresql.ARRAY(sa.String(length=50)),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column("status", AutoString(length=20), nullable=False),
        sa.Column("looking_for_contributors", sa.Boolean(), nullable=False),
        sa.Column("project_photo", AutoString(length=500), nullable=True),
        sa.Column("github_url", AutoString(length=500), nullable=True),
        sa.Column("deployment_url", AutoString(length=500), nullable=True),
        sa.Column("demo_url", AutoString(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "slug", name="uq_projects_owner_slug"),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])
    op.create_index("ix_projects_domain", "projects", ["domain"])
    op.create_index("ix_projects_created_at_id", "projects", ["created_at", "id"])
    op.create_index(
        "ix_projects_tech_stack",
        "projects",
        ["tech_stack"],
        postgresql_using="gin",
    )

    op.create_table(
        "join_requests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("requester_id", sa.Uuid(), nullable=False),
        sa.Column("message", AutoString(length=1000), nullable=True),
        sa.Column("role_requested", AutoString(length=100), nullable=True),
        sa.Column("status", AutoString(length=20), nullable=False),
        sa.Column("reviewed_by", sa.Uuid(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["reviewed_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_join_requests_project_id", "join_requests", ["project_id"])
    op.create_index("ix_join_requests_requester_id", "join_requests", ["requester_id"])
    op.create_index("ix_join_requests_status", "join_requests", ["status"])
    # At most one pending request per (project, requester); history is unconstrained
    op.create_index(
        "uq_join_requests_pending",
        "join_requests",
        ["project_id", "requester_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "collaborations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("collaborator_id", sa.Uuid(), nullable=False),
        sa.Column("role", AutoString(length=100), nullable=False),
        sa.Column("contribution_summary", AutoString(length=1000), nullable=False),
        sa.Column("request_id", sa.Uuid(), nullable=True),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["collaborator_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["request_id"], ["join_requests.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "project_id", "collaborator_id", name="uq_collaborations_project_collaborator"
        ),
    )
    op.create_index("ix_collaborations_project_id", "collaborations", ["project_id"])
    op.create_index("ix_collaborations_collaborator_id", "collaborations", ["collaborator_id"])

    op.create_table(
        "project_likes",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("project_id", "user_id"),
    )

    op.create_table(
        "bookmarks",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("user_id", "project_id"),
    )
    op.create_index("ix_bookmarks_project_id", "bookmarks", ["project_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("content", AutoString(length=2000), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_project_id", "comments", ["project_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), nullable=False),
        sa.Column("sender_id", sa.Uuid(), nullable=True),
        sa.Column("type", AutoString(length=50), nullable=False),
        sa.Column("title", AutoString(length=200), nullable=False),
        sa.Column("message", AutoString(length=1000), nullable=True),
        sa.Column("link", AutoString(length=500), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_recipient_id", "notifications", ["recipient_id"])


def downgrade() -> None:
    op.drop_index("ix_notifications_recipient_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_comments_user_id", table_name="comments")
    op.drop_index("ix_comments_project_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_bookmarks_project_id", table_name="bookmarks")
    op.drop_table("bookmarks")
    op.drop_table("project_likes")
    op.drop_index("ix_collaborations_collaborator_id", table_name="collaborations")
    op.drop_index("ix_collaborations_project_id", table_name="collaborations")
    op.drop_table("collaborations")
    op.drop_index("uq_join_requests_pending", table_name="join_requests")
    op.drop_index("ix_join_requests_status", table_name="join_requests")
    op.drop_index("ix_join_requests_requester_id", table_name="join_requests")
    op.drop_index("ix_join_requests_project_id", table_name="join_requests")
    op.drop_table("join_requests")
    op.drop_index("ix_projects_tech_stack", table_name="projects")
    op.drop_index("ix_projects_created_at_id", table_name="projects")
    op.drop_index("ix_projects_domain", table_name="projects")
    op.drop_index("ix_projects_owner_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
