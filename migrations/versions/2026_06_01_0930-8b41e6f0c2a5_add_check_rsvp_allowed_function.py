"""add_check_rsvp_allowed_function

Revision ID: 8b41e6f0c2a5
Revises: 3f2a9c1d7b10
Create Date: 2026-06-01 09:30:00.000000

"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "8b41e6f0c2a5"
down_revision = "3f2a9c1d7b10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # One row: whether the project takes RSVPs now, its RSVP config, and why not
    op.execute(
        """
        CREATE OR REPLACE FUNCTION check_rsvp_allowed(project_uuid uuid)
        RETURNS TABLE (is_allowed boolean, config_data json, error_message text)
        LANGUAGE plpgsql
        STABLE
        AS $$
        DECLARE
            project_row wedding_projects%ROWTYPE;
            config_row rsvp_config%ROWTYPE;
        BEGIN
            SELECT * INTO project_row FROM wedding_projects WHERE uuid = project_uuid;
            IF NOT FOUND THEN
                RETURN QUERY SELECT false, NULL::json, 'Wedding project not found'::text;
                RETURN;
            END IF;

            SELECT * INTO config_row FROM rsvp_config WHERE project_id = project_uuid;
            IF NOT FOUND THEN
                RETURN QUERY SELECT true, '{}'::json, NULL::text;
                RETURN;
            END IF;

            IF NOT config_row.is_enabled THEN
                RETURN QUERY SELECT false, row_to_json(config_row),
                    'RSVP is not enabled for this wedding'::text;
                RETURN;
            END IF;

            IF config_row.deadline_date IS NOT NULL AND config_row.deadline_date < now() THEN
                RETURN QUERY SELECT false, row_to_json(config_row),
                    'The RSVP deadline has passed'::text;
                RETURN;
            END IF;

            RETURN QUERY SELECT true, row_to_json(config_row), NULL::text;
        END;
        $$;
        """
    )


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS check_rsvp_allowed(uuid)")
