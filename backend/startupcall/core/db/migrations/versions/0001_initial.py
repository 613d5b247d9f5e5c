"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("created_by", sa.String(length=128), nullable=True),
        sa.Column("updated_by", sa.String(length=128), nullable=True),
    ]


def _startup_fk() -> sa.Column:
    return sa.Column("startup_id", sa.Uuid(), sa.ForeignKey("startups.id", ondelete="CASCADE"), nullable=False)


def upgrade() -> None:
    # --- Core
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("external_id", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("display_name", sa.String(length=200), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="ENTREPRENEUR"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
    )
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("actor_id", sa.String(length=200), nullable=False),
        sa.Column("actor_roles", sa.JSON(), nullable=False),
        sa.Column("action", sa.String(length=200), nullable=False),
        sa.Column("entity_type", sa.String(length=100), nullable=False),
        sa.Column("entity_id", sa.String(length=200), nullable=False),
        sa.Column("startup_id", sa.String(length=64), nullable=True),
        sa.Column("before", sa.JSON(), nullable=True),
        sa.Column("after", sa.JSON(), nullable=True),
        sa.Column("request_id", sa.String(length=64), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_audit_events_actor_id", "audit_events", ["actor_id"])
    op.create_index("ix_audit_events_action", "audit_events", ["action"])
    op.create_index("ix_audit_events_request_id", "audit_events", ["request_id"])
    op.create_index(
        "ix_audit_events_startup_entity", "audit_events", ["startup_id", "entity_type", "entity_id"]
    )

    # --- Startups
    op.create_table(
        "startups",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("pitch", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("industries", sa.JSON(), nullable=False),
        sa.Column("funding_stage", sa.String(length=32), nullable=False, server_default="IDEA"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="DRAFT"),
        sa.Column("founder_actor_id", sa.String(length=200), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_startups_name", "startups", ["name"])
    op.create_index("ix_startups_status", "startups", ["status"])
    op.create_index("ix_startups_funding_stage", "startups", ["funding_stage"])
    op.create_index("ix_startups_founder_status", "startups", ["founder_actor_id", "status"])

    op.create_table(
        "startup_status_history",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("from_status", sa.String(length=32), nullable=False),
        sa.Column("to_status", sa.String(length=32), nullable=False),
        sa.Column("changed_by", sa.String(length=200), nullable=False),
        sa.Column("rationale", sa.Text(), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_startup_status_history_startup_id", "startup_status_history", ["startup_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("reviewer_actor_id", sa.String(length=200), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("innovation_score", sa.Integer(), nullable=False),
        sa.Column("market_score", sa.Integer(), nullable=False),
        sa.Column("team_score", sa.Integer(), nullable=False),
        sa.Column("execution_score", sa.Integer(), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=False),
        *_audit_columns(),
        sa.UniqueConstraint("startup_id", "reviewer_actor_id", name="uq_review_startup_reviewer"),
    )
    op.create_index("ix_reviews_startup_id", "reviews", ["startup_id"])

    op.create_table(
        "milestones",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="PENDING"),
        *_audit_columns(),
    )
    op.create_index("ix_milestones_startup_id", "milestones", ["startup_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="TODO"),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="MEDIUM"),
        sa.Column("assignee_actor_id", sa.String(length=200), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_tasks_startup_status", "tasks", ["startup_id", "status"])
    op.create_index("ix_tasks_assignee_actor_id", "tasks", ["assignee_actor_id"])

    # --- Financials
    op.create_table(
        "sponsorships",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("sponsor_actor_id", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_sponsorships_startup_id", "sponsorships", ["startup_id"])
    op.create_index("ix_sponsorships_sponsor_actor_id", "sponsorships", ["sponsor_actor_id"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_expenses_startup_id", "expenses", ["startup_id"])

    # --- Team, documents, discussion
    op.create_table(
        "team_members",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=100), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("user_actor_id", sa.String(length=200), nullable=True),
        *_audit_columns(),
        sa.UniqueConstraint("startup_id", "email", name="uq_team_member_startup_email"),
    )
    op.create_index("ix_team_members_startup_id", "team_members", ["startup_id"])
    op.create_index("ix_team_members_user_actor_id", "team_members", ["user_actor_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content_type", sa.String(length=200), nullable=False),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("url", sa.String(length=1000), nullable=False),
        sa.Column("uploaded_by", sa.String(length=200), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_documents_startup_id", "documents", ["startup_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        _startup_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_actor_id", sa.String(length=200), nullable=False),
        sa.Column("parent_id", sa.Uuid(), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_comments_startup_id", "comments", ["startup_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])

    # --- Public content
    op.create_table(
        "sponsorship_opportunities",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("benefits", sa.JSON(), nullable=False),
        sa.Column("min_amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("max_amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="DRAFT"),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_sponsorship_opportunities_status", "sponsorship_opportunities", ["status"])

    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("event_type", sa.String(length=64), nullable=False, server_default="GENERAL"),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_events_start_date", "events", ["start_date"])

    op.create_table(
        "announcements",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="DRAFT"),
        *_audit_columns(),
    )
    op.create_index("ix_announcements_status", "announcements", ["status"])


def downgrade() -> None:
    for table in (
        "announcements",
        "events",
        "sponsorship_opportunities",
        "comments",
        "documents",
        "team_members",
        "expenses",
        "sponsorships",
        "tasks",
        "milestones",
        "reviews",
        "startup_status_history",
        "startups",
        "audit_events",
        "users",
    ):
        op.drop_table(table)
