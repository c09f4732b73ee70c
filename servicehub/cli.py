"""
Custom Flask CLI commands.

These commands are registered with the app in the application
factory.  Run them with ``flask <command_name>``.

Usage::

    flask db-check                       # Verify connectivity and tables
    flask create-tables                  # Create tables on a fresh database
    flask issue-token dev.admin@localhost  # Print a bearer token
"""

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from servicehub.extensions import db
from servicehub.models import AuditLog, Service, User
from servicehub.services import token_service, user_service

_EXPECTED_TABLES = ("user", "service", "audit_log")


@click.command("db-check")
@with_appcontext
def db_check_command():
    """
    Verify database connectivity and confirm expected tables exist.

    Runs a trivial query against the configured database, lists which
    application tables are present, and prints row counts.
    """
    click.echo("=" * 60)
    click.echo("  ServiceHub — Database Connectivity Check")
    click.echo("=" * 60)

    db_uri = db.engine.url.render_as_string(hide_password=True)
    click.echo(f"\n  Connection string: {db_uri}\n")

    # -- Step 1: Basic connectivity ----------------------------------------
    click.echo("[1/2] Testing connection...")
    try:
        row = db.session.execute(db.text("SELECT 1 AS connected")).fetchone()
    except SQLAlchemyError as exc:
        click.secho(f"      ✗ Connection failed: {exc}", fg="red")
        click.echo("\n  Troubleshooting tips:")
        click.echo("    - Is the database server running?")
        click.echo("    - Does DATABASE_URL point at the right database?")
        raise SystemExit(1)
    if not row or row[0] != 1:
        click.secho("      ✗ Unexpected result from test query.", fg="red")
        raise SystemExit(1)
    click.secho("      ✓ Connected successfully.", fg="green")

    # -- Step 2: Tables and row counts -------------------------------------
    click.echo("[2/2] Checking tables...\n")
    present = set(inspect(db.engine).get_table_names())
    missing = [name for name in _EXPECTED_TABLES if name not in present]
    if missing:
        click.secho(f"      ✗ Missing tables: {', '.join(missing)}", fg="red")
        click.echo("        Run 'flask db upgrade' or 'flask create-tables'.")
        raise SystemExit(1)

    counts = {
        "user": db.session.query(db.func.count(User.id)).scalar(),
        "service": db.session.query(db.func.count(Service.id)).scalar(),
        "audit_log": db.session.query(db.func.count(AuditLog.id)).scalar(),
    }
    for table, count in counts.items():
        click.echo(f"      {table:>10}  — {count} row(s)")

    click.echo("\n" + "=" * 60)
    click.secho("  All checks passed. Database is ready.", fg="green", bold=True)
    click.echo("=" * 60)


@click.command("create-tables")
@with_appcontext
def create_tables_command():
    """Create all tables directly from the models (local/dev databases)."""
    db.create_all()
    click.secho(
        f"Tables created on {current_app.config['SQLALCHEMY_DATABASE_URI']}",
        fg="green",
    )


@click.command("issue-token")
@click.argument("email")
@with_appcontext
def issue_token_command(email: str):
    """Print a bearer token for the active user with EMAIL."""
    user = user_service.get_user_by_email(email)
    if user is None or not user.is_active:
        click.secho(f"No active user with email '{email}'.", fg="red", err=True)
        raise SystemExit(1)
    click.echo(token_service.issue_token(user))


def register_commands(app):
    """Register all custom CLI commands with the Flask application."""
    app.cli.add_command(db_check_command)
    app.cli.add_command(create_tables_command)
    app.cli.add_command(issue_token_command)
