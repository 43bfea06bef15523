"""CLI tools for membership reminder administration."""

import logging
import os

import click

from civimember.core.config import settings
from civimember.db.session import SessionLocal
from civimember.services import (
    action_schedule_service,
    membership_status_service,
    recipient_builder,
    scheduled_job_service,
)
from civimember.services.action_mapping import ActionMappingNotFoundError, build_mapping_registry


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this command")
def cli(log_level: str | None):
    """CiviMember CLI tools."""
    logging.basicConfig(
        level=(log_level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command()
@click.option(
    "--domain-id",
    default=None,
    type=int,
    help="Domain to bind the jobs to (default: DEFAULT_DOMAIN_ID)",
)
def install_jobs(domain_id: int | None):
    """
    Install the default scheduled jobs for a domain.

    Jobs that already exist for the domain are left untouched.

    Example:
        python -m civimember.cli install-jobs --domain-id 1
    """
    domain_id = settings.DEFAULT_DOMAIN_ID if domain_id is None else domain_id
    db = SessionLocal()
    try:
        created = scheduled_job_service.install_default_jobs(db, domain_id)
        click.echo(f"✓ Installed {len(created)} scheduled jobs for domain {domain_id}")
        for job in created:
            state = "active" if job.is_active else "inactive"
            click.echo(f"  {job.api_entity}.{job.api_action} ({job.run_frequency}, {state})")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
def list_mappings():
    """List the entities scheduled reminders can target."""
    registry = build_mapping_registry()
    for mapping in registry.all():
        click.echo(f"{mapping.id}: {mapping.entity_label} ({mapping.entity})")
        for field_name, label in mapping.get_date_fields().items():
            click.echo(f"  {field_name}: {label}")


@cli.command()
@click.option("--schedule-id", required=True, type=int, help="Scheduled reminder ID")
@click.option("--due-only", is_flag=True, help="Only show recipients whose reminder is due")
def preview_recipients(schedule_id: int, due_only: bool):
    """
    Show who a scheduled reminder would go to.

    Example:
        python -m civimember.cli preview-recipients --schedule-id 3 --due-only
    """
    db = SessionLocal()
    try:
        schedule = action_schedule_service.get_schedule(db, schedule_id)
        registry = build_mapping_registry(membership_status_service.make_status_resolver(db))
        if due_only:
            recipients = recipient_builder.find_due_recipients(db, schedule, registry)
        else:
            recipients = recipient_builder.find_recipients(db, schedule, registry)

        click.echo(f"✓ Schedule {schedule.id} ({schedule.title}): {len(recipients)} recipients")
        for r in recipients:
            reminder = r.reminder_date.isoformat() if r.reminder_date else "-"
            due = "due" if r.is_due else "pending"
            click.echo(f"  contact {r.contact_id} entity {r.entity_id or '-'} {reminder} {due}")

    except action_schedule_service.ActionScheduleNotFoundError:
        click.echo(f"❌ Scheduled reminder not found: {schedule_id}")
    except ActionMappingNotFoundError as e:
        click.echo(f"❌ {e}")
    finally:
        db.close()


@cli.command()
@click.option("--host", default=lambda: os.getenv("HOST", "127.0.0.1"), help="Bind address")
@click.option("--port", default=lambda: int(os.getenv("PORT", "8000")), type=int, help="Bind port")
def serve(host: str, port: int):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("civimember.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
