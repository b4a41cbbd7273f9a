"""create_submission_tables

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-06-01 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f2a9c1d7b10"
down_revision = None
branch_labels = None
depends_on = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    # Projects and their configuration are written by the site editor
    op.create_table(
        "wedding_projects",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subdomain", sa.String(length=100), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("subdomain"),
    )
    op.create_index("ix_wedding_projects_owner_id", "wedding_projects", ["owner_id"])

    op.create_table(
        "rsvp_config",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("subtitle", sa.String(length=255), nullable=True),
        sa.Column("deadline_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confirmation_message", sa.Text(), nullable=True),
        sa.Column("dance_song_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("dance_song_question", sa.Text(), nullable=True),
        sa.Column("advice_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("advice_question", sa.Text(), nullable=True),
        sa.Column("memory_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("memory_question", sa.Text(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["wedding_projects.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("project_id"),
    )

    op.create_table(
        "wishes_config",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_layout", sa.String(length=50), nullable=True),
        sa.Column("welcome_message", sa.Text(), nullable=True),
        sa.Column("max_message_length", sa.Integer(), nullable=True),
        sa.Column("require_email", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["wedding_projects.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("project_id"),
    )

    op.create_table(
        "rsvp_responses",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("guest_name", sa.String(length=100), nullable=False),
        sa.Column("guest_email", sa.String(length=255), nullable=True),
        sa.Column("guest_phone", sa.String(length=20), nullable=True),
        sa.Column(
            "attendance_status",
            sa.Enum("attending", "not_attending", "maybe", name="attendance_status_enum"),
            nullable=False,
        ),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("dance_song", sa.String(length=200), nullable=True),
        sa.Column("advice_newlyweds", sa.Text(), nullable=True),
        sa.Column("favorite_memory", sa.Text(), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(["project_id"], ["wedding_projects.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_rsvp_responses_project_id", "rsvp_responses", ["project_id"])
    op.create_index("ix_rsvp_responses_submitted_at", "rsvp_responses", ["submitted_at"])

    op.create_table(
        "guest_wishes",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("guest_name", sa.String(length=100), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("guest_email", sa.String(length=255), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "approved", "rejected", name="wish_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("spam_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(["project_id"], ["wedding_projects.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guest_wishes_project_id", "guest_wishes", ["project_id"])
    op.create_index("ix_guest_wishes_status", "guest_wishes", ["status"])
    op.create_index("ix_guest_wishes_submitted_at", "guest_wishes", ["submitted_at"])

    op.create_table(
        "wish_rate_limits",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=False),
        sa.Column("submission_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("window_started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_submission", sa.DateTime(timezone=True), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["wedding_projects.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("project_id", "ip_address", name="uq_wish_rate_limits_project_ip"),
    )
    op.create_index("ix_wish_rate_limits_last_submission", "wish_rate_limits", ["last_submission"])


def downgrade() -> None:
    op.drop_index("ix_wish_rate_limits_last_submission", table_name="wish_rate_limits")
    op.drop_table("wish_rate_limits")
    op.drop_index("ix_guest_wishes_submitted_at", table_name="guest_wishes")
    op.drop_index("ix_guest_wishes_status", table_name="guest_wishes")
    op.drop_index("ix_guest_wishes_project_id", table_name="guest_wishes")
    op.drop_table("guest_wishes")
    op.drop_index("ix_rsvp_responses_submitted_at", table_name="rsvp_responses")
    op.drop_index("ix_rsvp_responses_project_id", table_name="rsvp_responses")
    op.drop_table("rsvp_responses")
    op.drop_table("wishes_config")
    op.drop_table("rsvp_config")
    op.drop_index("ix_wedding_projects_owner_id", table_name="wedding_projects")
    op.drop_table("wedding_projects")
    op.execute("DROP TYPE wish_status_enum")
    op.execute("DROP TYPE attendance_status_enum")
