"""``flask seed`` commands that load demo channels, videos and relations."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from vidtube.core.extensions import db
from vidtube.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("vidtube.seeds").setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Print one ``created``/``existing`` line per table."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _ensure_non_production() -> None:
    """Refuse destructive commands unless debugging or testing."""
    config = current_app.config
    if str(config.get("APP_ENV", "")).lower() == "production" and not (
        config.get("DEBUG") or config.get("TESTING")
    ):
        raise click.UsageError("'flask seed fresh' is not available in production.")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded row.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Demo data commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert demo data; rows that already exist are left alone."""
    try:
        summary = seed_data.run_all(db, verbose=bool(ctx.obj.get("verbose")))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping tables.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    _ensure_non_production()
    if not yes:
        click.confirm("This will DROP all tables and recreate them. Continue?", abort=True)
    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    try:
        summary = seed_data.run_all(db, verbose=bool(ctx.obj.get("verbose")))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Fresh seed failed: {exc}") from exc
    _echo_summary(summary)
