"""Flask CLI commands for idempotent bootstrap data (roles, department, admin)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from complaints.core.extensions import db
from complaints.models import Department, Role, User
from complaints.services._shared.policies.common import ADMIN_ROLE, USER_ROLE

LOGGER = logging.getLogger(__name__)

Summary = dict[str, dict[str, int]]


def _configure_logging(verbose: bool) -> None:
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)


def _count(summary: Summary, table: str, created: bool) -> None:
    counters = summary.setdefault(table, {"created": 0, "existing": 0})
    counters["created" if created else "existing"] += 1


def _echo_summary(summary: Summary) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    app_env = str(config.get("APP_ENV", "")).lower()
    if app_env == "production" or not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )


def _get_or_create_role(session: Session, name: str, summary: Summary) -> Role:
    role = session.scalar(select(Role).where(Role.name == name))
    _count(summary, "roles", role is None)
    if role is None:
        role = Role(name=name)
        session.add(role)
        session.flush()
        LOGGER.debug("Created role %s", name)
    return role


def run_all(session: Session, config: Mapping[str, Any]) -> Summary:
    """
    Create the built-in roles, a default department and the admin account.

    Existing rows are left untouched, so the command can run repeatedly.

    :param session: Session the rows are added to; committed on success.
    :param config: Application config providing the ``SEED_*`` settings.
    :raises click.UsageError: When the admin must be created and
        ``SEED_ADMIN_PASSWORD`` is not set.
    """
    summary: Summary = {}
    admin_role = _get_or_create_role(session, ADMIN_ROLE, summary)
    _get_or_create_role(session, config.get("DEFAULT_USER_ROLE") or USER_ROLE, summary)

    dept_name = config.get("SEED_DEFAULT_DEPARTMENT", "General")
    department = session.scalar(select(Department).where(Department.name == dept_name))
    _count(summary, "departments", department is None)
    if department is None:
        department = Department(name=dept_name)
        session.add(department)
        session.flush()

    username = config.get("SEED_ADMIN_USERNAME", "admin")
    admin = session.scalar(select(User).where(User.username == username))
    _count(summary, "users", admin is None)
    if admin is None:
        password = config.get("SEED_ADMIN_PASSWORD")
        if not password:
            raise click.UsageError("SEED_ADMIN_PASSWORD must be set to create the admin user.")
        session.add(
            User(
                username=username,
                email=config.get("SEED_ADMIN_EMAIL", "admin@example.com"),
                password=password,
                first_name="System",
                last_name="Administrator",
                role_id=admin_role.id,
                department_id=department.id,
            )
        )
        LOGGER.info("Created admin user %s", username)

    session.commit()
    return summary


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("run")
@with_appcontext
def run_command() -> None:
    """Populate the database with roles, a department and the admin user."""
    try:
        summary = run_all(db.session, current_app.config)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    except click.ClickException:
        db.session.rollback()
        raise
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def fresh_command(yes: bool) -> None:
    """Drop all tables, recreate the schema, and seed bootstrap data."""
    _ensure_non_production()
    if not yes:
        click.confirm(
            "This will DROP all application tables and recreate them. Continue?",
            abort=True,
        )
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    LOGGER.info("Recreating database schema...")
    db.create_all()
    try:
        summary = run_all(db.session, current_app.config)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Fresh seed failed: {exc}") from exc
    _echo_summary(summary)
