"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000

This migration creates every table:
1. Users: members, agents, agent_students
2. Programs
3. Applications: applications (direct), agent_applications
4. Documents: application_documents, agent_student_documents
5. Wallets: wallets, wallet_transactions
6. Notifications, activity_logs, app_configs

Parents are created before the tables that reference them.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _lifecycle_columns() -> list[sa.Column]:
    """Columns shared by applications and agent_applications."""
    return [
        sa.Column("program_id", sa.Integer(), nullable=False),
        sa.Column("program_category", sa.String(length=50), nullable=True),
        sa.Column("application_stage", sa.Integer(), nullable=False),
        sa.Column("payment_status", sa.String(length=20), nullable=False),
        sa.Column("application_status", sa.String(length=50), nullable=False),
        sa.Column("intake", sa.String(length=50), nullable=True),
        sa.Column(
            "application_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("application_status_date", sa.DateTime(timezone=True), nullable=True),
    ]


def _review_columns() -> list[sa.Column]:
    """Columns shared by both document tables."""
    return [
        sa.Column("document_type", sa.String(length=50), nullable=False),
        sa.Column("document_path", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("admin_comment", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.Integer(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables and indexes."""
    # Users
    op.create_table(
        "members",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("other_names", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("nationality", sa.String(length=100), nullable=True),
        sa.Column("id_type", sa.String(length=50), nullable=True),
        sa.Column("id_number", sa.String(length=100), nullable=True),
        sa.Column("id_scan_front", sa.Text(), nullable=True),
        sa.Column("home_address", sa.String(length=500), nullable=True),
        sa.Column("home_city", sa.String(length=100), nullable=True),
        sa.Column("home_zip_code", sa.String(length=20), nullable=True),
        sa.Column("home_state", sa.String(length=100), nullable=True),
        sa.Column("home_country", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_members_email"), "members", ["email"], unique=True)

    op.create_table(
        "agents",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=200), nullable=True),
        sa.Column("contact_person", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_agents_email"), "agents", ["email"], unique=True)

    op.create_table(
        "agent_students",
        *_base_columns(),
        sa.Column("agent_id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("nationality", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_agent_students_agent_id"), "agent_students", ["agent_id"])

    # Programs
    op.create_table(
        "programs",
        *_base_columns(),
        sa.Column("program_name", sa.String(length=200), nullable=False),
        sa.Column("school_name", sa.String(length=200), nullable=False),
        sa.Column("degree", sa.String(length=100), nullable=True),
        sa.Column("degree_level", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tuition_fee", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("application_fee", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("application_deadline", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_programs_program_name"), "programs", ["program_name"])
    op.create_index(op.f("ix_programs_category"), "programs", ["category"])

    # Applications
    op.create_table(
        "applications",
        *_base_columns(),
        *_lifecycle_columns(),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_applications_program_id"), "applications", ["program_id"])
    op.create_index(op.f("ix_applications_member_id"), "applications", ["member_id"])
    op.create_index(
        op.f("ix_applications_application_status"), "applications", ["application_status"]
    )

    op.create_table(
        "agent_applications",
        *_base_columns(),
        *_lifecycle_columns(),
        sa.Column("agent_id", sa.Integer(), nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["member_id"], ["agent_students.id"], ondelete="CASCADE"),
    )
    op.create_index(
        op.f("ix_agent_applications_program_id"), "agent_applications", ["program_id"]
    )
    op.create_index(op.f("ix_agent_applications_agent_id"), "agent_applications", ["agent_id"])
    op.create_index(
        op.f("ix_agent_applications_member_id"), "agent_applications", ["member_id"]
    )
    op.create_index(
        op.f("ix_agent_applications_application_status"),
        "agent_applications",
        ["application_status"],
    )
    op.create_index(
        "ix_agent_applications_agent_status",
        "agent_applications",
        ["agent_id", "application_status"],
    )

    # Documents
    op.create_table(
        "application_documents",
        *_base_columns(),
        *_review_columns(),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "member_id", "document_type", name="uq_application_documents_member_type"
        ),
    )
    op.create_index(
        op.f("ix_application_documents_member_id"), "application_documents", ["member_id"]
    )

    op.create_table(
        "agent_student_documents",
        *_base_columns(),
        *_review_columns(),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("agent_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["agent_students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "student_id", "document_type", name="uq_agent_student_documents_student_type"
        ),
    )
    op.create_index(
        op.f("ix_agent_student_documents_student_id"), "agent_student_documents", ["student_id"]
    )
    op.create_index(
        op.f("ix_agent_student_documents_agent_id"), "agent_student_documents", ["agent_id"]
    )

    # Wallets
    op.create_table(
        "wallets",
        *_base_columns(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_type", sa.String(length=20), nullable=False),
        sa.Column(
            "balance",
            sa.Numeric(precision=10, scale=2),
            server_default="0",
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "user_type", name="uq_wallets_user"),
    )

    op.create_table(
        "wallet_transactions",
        *_base_columns(),
        sa.Column("wallet_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_type", sa.String(length=20), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["wallet_id"], ["wallets.id"], ondelete="CASCADE"),
    )
    op.create_index(
        op.f("ix_wallet_transactions_wallet_id"), "wallet_transactions", ["wallet_id"]
    )
    op.create_index(
        "ix_wallet_transactions_application",
        "wallet_transactions",
        ["application_id", "type"],
    )

    # Notifications
    op.create_table(
        "notifications",
        *_base_columns(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_type", sa.String(length=20), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("link", sa.String(length=500), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notifications_user", "notifications", ["user_id", "user_type", "status"]
    )

    # Activity logs
    op.create_table(
        "activity_logs",
        *_base_columns(),
        sa.Column("activity", sa.String(length=255), nullable=False),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("admin_id", sa.Integer(), nullable=True),
        sa.Column("entity_type", sa.String(length=50), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_logs_entity", "activity_logs", ["entity_type", "entity_id"])

    # App config
    op.create_table(
        "app_configs",
        *_base_columns(),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_app_configs_key"), "app_configs", ["key"], unique=True)


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index(op.f("ix_app_configs_key"), table_name="app_configs")
    op.drop_table("app_configs")

    op.drop_index("ix_activity_logs_entity", table_name="activity_logs")
    op.drop_table("activity_logs")

    op.drop_index("ix_notifications_user", table_name="notifications")
    op.drop_table("notifications")

    op.drop_table("wallet_transactions")
    op.drop_table("wallets")

    op.drop_table("agent_student_documents")
    op.drop_table("application_documents")

    op.drop_table("agent_applications")
    op.drop_table("applications")

    op.drop_table("programs")
    op.drop_table("agent_students")
    op.drop_table("agents")
    op.drop_table("members")
