"""Seed default scheduled jobs for the configured domain.

Revision ID: 20261019_0930
Revises: 20261019_0900
Create Date: 2026-10-19 09:30:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from civimember.core.config import settings
from civimember.jobs.seed import DEFAULT_SCHEDULED_JOBS


# revision identifiers, used by Alembic.
revision: str = "20261019_0930"
down_revision: Union[str, Sequence[str], None] = "20261019_0900"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


scheduled_jobs = sa.table(
    "scheduled_jobs",
    sa.column("domain_id", sa.Integer),
    sa.column("run_frequency", sa.String),
    sa.column("last_run", sa.DateTime),
    sa.column("name", sa.String),
    sa.column("description", sa.Text),
    sa.column("api_entity", sa.String),
    sa.column("api_action", sa.String),
    sa.column("parameters", sa.Text),
    sa.column("is_active", sa.Boolean),
)


def upgrade() -> None:
    conn = op.get_bind()
    domain_id = settings.DEFAULT_DOMAIN_ID
    for definition in DEFAULT_SCHEDULED_JOBS:
        exists = conn.execute(
            sa.text(
                "SELECT 1 FROM scheduled_jobs WHERE domain_id = :domain_id "
                "AND api_entity = :api_entity AND api_action = :api_action LIMIT 1"
            ),
            {
                "domain_id": domain_id,
                "api_entity": definition.api_entity,
                "api_action": definition.api_action,
            },
        ).first()
        if exists:
            continue
        conn.execute(
            scheduled_jobs.insert().values(
                domain_id=domain_id,
                run_frequency=definition.run_frequency.value,
                last_run=None,
                name=definition.name,
                description=definition.description,
                api_entity=definition.api_entity,
                api_action=definition.api_action,
                parameters=definition.parameters,
                is_active=definition.is_active,
            )
        )


def downgrade() -> None:
    conn = op.get_bind()
    for definition in DEFAULT_SCHEDULED_JOBS:
        conn.execute(
            sa.text(
                "DELETE FROM scheduled_jobs WHERE domain_id = :domain_id "
                "AND api_entity = :api_entity AND api_action = :api_action"
            ),
            {
                "domain_id": settings.DEFAULT_DOMAIN_ID,
                "api_entity": definition.api_entity,
                "api_action": definition.api_action,
            },
        )
