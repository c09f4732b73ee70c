"""
Seed commands — development users and sample services.

Registers two CLI commands:

    flask seed-dev-admin                    # Create or re-promote the dev admin
    flask seed-dev-admin --email me@co.test # Custom email
    flask seed-dev-data                     # Sample provider, user, services

Pair them with ``flask issue-token <email>`` (or ``POST /auth/dev-token``
when ``DEV_TOKEN_ENABLED`` is set) to call the admin API locally.

Prerequisites:
    - The tables must exist (``flask db upgrade`` or
      ``flask create-tables``).
"""

import click
from flask.cli import with_appcontext

from servicehub.extensions import db
from servicehub.models.service import ApprovalStatus, Service
from servicehub.models.user import UserRole
from servicehub.services import user_service

# -- Default values for the dev admin user ---------------------------------
_DEFAULT_EMAIL = "dev.admin@localhost"
_DEFAULT_NAME = "Dev Admin"

# -- Sample catalog for seed-dev-data --------------------------------------
_SAMPLE_PROVIDER = ("Pat Provider", "dev.provider@localhost")
_SAMPLE_USER = ("Sam Standard", "dev.user@localhost")
_SAMPLE_SERVICES = (
    ("House Cleaning", "Weekly or one-off cleaning.", ApprovalStatus.PENDING, False),
    ("Garden Care", "Lawn mowing and hedge trimming.", ApprovalStatus.APPROVED, True),
    ("Dog Walking", "Hour-long walks, twice a day.", ApprovalStatus.APPROVED, False),
    ("Moving Help", "Two movers and a van.", ApprovalStatus.REJECTED, False),
)


@click.command("seed-dev-admin")
@click.option(
    "--email",
    default=_DEFAULT_EMAIL,
    show_default=True,
    help="Email address for the dev admin user.",
)
@click.option(
    "--name",
    default=_DEFAULT_NAME,
    show_default=True,
    help="Display name for the dev admin user.",
)
@with_appcontext
def seed_dev_admin_command(email: str, name: str):
    """
    Create a development admin user for local testing.

    If a user with the given email already exists, the script makes
    sure they are an active admin instead of creating a duplicate.
    """
    click.echo("=" * 60)
    click.echo("  ServiceHub — Seed Dev Admin User")
    click.echo("=" * 60)

    user = user_service.get_user_by_email(email)

    if user is not None:
        click.echo(f"\n  User '{email}' already exists (id={user.id}).")
        if not user.is_active:
            user.is_active = True
            db.session.commit()
            click.echo("      → Reactivated user.")
        if user.role != UserRole.ADMIN:
            user_service.promote_user(user.id)
            click.echo("      → Promoted to admin.")
        click.secho("  ✓ User is an active admin.", fg="green")
    else:
        user = user_service.create_user(name=name, email=email, role=UserRole.ADMIN)
        click.secho(f"\n  ✓ Created user: {name} <{email}> (id={user.id})", fg="green")

    click.echo("\n" + "=" * 60)
    click.secho("  Dev admin user is ready.", fg="green", bold=True)
    click.echo(f"  Email:  {user.email}")
    click.echo(f"  Name:   {user.name}")
    click.echo(f"  Role:   {user.role.value}")
    click.echo("=" * 60)
    click.echo(f"\n  → Get a token with: flask issue-token {user.email}\n")


@click.command("seed-dev-data")
@with_appcontext
def seed_dev_data_command():
    """Create a sample provider, a standard user and a few services."""
    provider = user_service.get_user_by_email(_SAMPLE_PROVIDER[1])
    if provider is None:
        provider = user_service.create_user(
            name=_SAMPLE_PROVIDER[0],
            email=_SAMPLE_PROVIDER[1],
            role=UserRole.PROVIDER,
        )
        click.echo(f"Created provider {provider.email}")

    if user_service.get_user_by_email(_SAMPLE_USER[1]) is None:
        user_service.create_user(name=_SAMPLE_USER[0], email=_SAMPLE_USER[1])
        click.echo(f"Created user {_SAMPLE_USER[1]}")

    created = 0
    for name, description, status, featured in _SAMPLE_SERVICES:
        exists = Service.query.filter_by(provider_id=provider.id, name=name).first()
        if exists is not None:
            continue
        db.session.add(
            Service(
                name=name,
                description=description,
                provider_id=provider.id,
                approval_status=status,
                featured=featured,
            )
        )
        created += 1
    db.session.commit()

    click.secho(f"Seeded {created} service(s).", fg="green")


def register_seed_commands(app):
    """Register seed-related CLI commands with the Flask application."""
    app.cli.add_command(seed_dev_admin_command)
    app.cli.add_command(seed_dev_data_command)
