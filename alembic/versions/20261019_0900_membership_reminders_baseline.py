"""Baseline: contacts, memberships, payment links, scheduled reminders and jobs.

Revision ID: 20261019_0900
Revises:
Create Date: 2026-10-19 09:00:00.000000

Tables:
- contacts, relationships: contacts and directed relationships with permissions
- membership_types, membership_statuses, memberships
- contribution_recurs, contributions
- membership_payment_link: contribution <-> membership links
- action_schedules: administrator-configured scheduled reminders
- scheduled_jobs: periodic background jobs
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_0900"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("display_name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    op.create_table(
        "relationships",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contact_id_a",
            sa.Integer(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "contact_id_b",
            sa.Integer(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("relationship_type", sa.String(64), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("is_permission_a_b", sa.Integer(), nullable=False),  # 0 none, 1 edit, 2 view
        sa.Column("is_permission_b_a", sa.Integer(), nullable=False),
    )
    op.create_index("idx_relationships_a_b", "relationships", ["contact_id_a", "contact_id_b"])
    op.create_index("idx_relationships_b_a", "relationships", ["contact_id_b", "contact_id_a"])

    op.create_table(
        "membership_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
    )

    op.create_table(
        "membership_statuses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False, unique=True),
        sa.Column("label", sa.String(128), nullable=True),
        sa.Column("is_current_member", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
    )

    op.create_table(
        "contribution_recurs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contact_id",
            sa.Integer(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(20, 2), nullable=False),
        sa.Column("frequency_unit", sa.String(8), nullable=False),
        sa.Column("frequency_interval", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
    )

    op.create_table(
        "contributions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contact_id",
            sa.Integer(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("total_amount", sa.Numeric(20, 2), nullable=False),
        sa.Column("receive_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "contribution_recur_id",
            sa.Integer(),
            sa.ForeignKey("contribution_recurs.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("idx_contributions_contact", "contributions", ["contact_id"])

    op.create_table(
        "memberships",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contact_id",
            sa.Integer(),
            sa.ForeignKey("contacts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "membership_type_id",
            sa.Integer(),
            sa.ForeignKey("membership_types.id"),
            nullable=False,
        ),
        sa.Column(
            "status_id",
            sa.Integer(),
            sa.ForeignKey("membership_statuses.id"),
            nullable=False,
        ),
        sa.Column(
            "contribution_recur_id",
            sa.Integer(),
            sa.ForeignKey("contribution_recurs.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_override", sa.Boolean(), nullable=True),
        sa.Column(
            "owner_membership_id",
            sa.Integer(),
            sa.ForeignKey("memberships.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("join_date", sa.Date(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
    )
    op.create_index("idx_memberships_contact", "memberships", ["contact_id"])
    op.create_index(
        "idx_memberships_type_status", "memberships", ["membership_type_id", "status_id"]
    )
    op.create_index("idx_memberships_owner", "memberships", ["owner_membership_id"])

    op.create_table(
        "membership_payment_link",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "membership_id",
            sa.Integer(),
            sa.ForeignKey("memberships.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "contribution_id",
            sa.Integer(),
            sa.ForeignKey("contributions.id", ondelete="CASCADE"),
            nullable=True,
        ),
    )
    op.create_index(
        "UI_contribution_membership",
        "membership_payment_link",
        ["contribution_id", "membership_id"],
        unique=True,
    )

    op.create_table(
        "action_schedules",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(64), nullable=False),
        sa.Column("mapping_id", sa.Integer(), nullable=False),
        sa.Column("entity_value", sa.String(255), nullable=True),
        sa.Column("entity_status", sa.String(64), nullable=True),
        sa.Column("start_action_date", sa.String(64), nullable=True),
        sa.Column("start_action_offset", sa.Integer(), nullable=True),
        sa.Column("start_action_unit", sa.String(8), nullable=True),
        sa.Column("start_action_condition", sa.String(64), nullable=True),
        sa.Column("absolute_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("recipient_manual", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index(
        "idx_action_schedules_mapping_active", "action_schedules", ["mapping_id", "is_active"]
    )

    op.create_table(
        "scheduled_jobs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("domain_id", sa.Integer(), nullable=False),
        sa.Column("run_frequency", sa.String(8), nullable=False),  # Always, Hourly, Daily
        sa.Column("last_run", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("api_entity", sa.String(255), nullable=False),
        sa.Column("api_action", sa.String(255), nullable=False),
        sa.Column("parameters", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.UniqueConstraint(
            "domain_id", "api_entity", "api_action", name="uq_scheduled_job_action"
        ),
    )
    op.create_index(
        "idx_scheduled_jobs_domain_active", "scheduled_jobs", ["domain_id", "is_active"]
    )


def downgrade() -> None:
    op.drop_index("idx_scheduled_jobs_domain_active", table_name="scheduled_jobs")
    op.drop_table("scheduled_jobs")
    op.drop_index("idx_action_schedules_mapping_active", table_name="action_schedules")
    op.drop_table("action_schedules")
    op.drop_index("UI_contribution_membership", table_name="membership_payment_link")
    op.drop_table("membership_payment_link")
    op.drop_index("idx_memberships_owner", table_name="memberships")
    op.drop_index("idx_memberships_type_status", table_name="memberships")
    op.drop_index("idx_memberships_contact", table_name="memberships")
    op.drop_table("memberships")
    op.drop_index("idx_contributions_contact", table_name="contributions")
    op.drop_table("contributions")
    op.drop_table("contribution_recurs")
    op.drop_table("membership_statuses")
    op.drop_table("membership_types")
    op.drop_index("idx_relationships_b_a", table_name="relationships")
    op.drop_index("idx_relationships_a_b", table_name="relationships")
    op.drop_table("relationships")
    op.drop_table("contacts")
