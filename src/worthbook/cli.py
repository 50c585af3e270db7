"""Command-line entry points for WorthBook."""

from __future__ import annotations

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import WorthBookError
from .logging_config import setup_logging


def _context(ctx: click.Context) -> AppContext:
    app: AppContext | None = ctx.obj
    if app is None:
        config = BaseConfig()
        setup_logging(config)
        app = create_app_context(config)
        ctx.obj = app
        ctx.call_on_close(app.dispose)
    return app


@click.group()
def cli() -> None:
    """Manage the WorthBook record stores."""


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create tables and indexes."""

    app = _context(ctx)
    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("add-user")
@click.argument("username")
@click.pass_context
def add_user(ctx: click.Context, username: str) -> None:
    """Register an owner row for USERNAME."""

    from .services.users import create_user

    app = _context(ctx)
    try:
        user = create_user(username, session_factory=app.session_factory)
    except WorthBookError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {user.username} (id={user.id})")


@cli.command("snapshot")
@click.option("--user-id", type=int, required=True)
@click.option("--notes", default=None, help="Free-text note stored with the snapshot")
@click.pass_context
def snapshot(ctx: click.Context, user_id: int, notes: str | None) -> None:
    """Record the user's current net worth."""

    from .services.net_worth import capture_snapshot

    app = _context(ctx)
    try:
        record = capture_snapshot(
            app.asset_repo,
            app.liability_repo,
            app.net_worth_repo,
            user_id=user_id,
            currency=app.config.DEFAULT_CURRENCY,
            notes=notes,
        )
    except WorthBookError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(
        f"Net worth {record.net_worth:.2f} {record.currency} "
        f"(assets {record.total_assets:.2f}, liabilities {record.total_liabilities:.2f})"
    )


@cli.command("history")
@click.option("--user-id", type=int, required=True)
@click.option("--ascending", is_flag=True, default=False, help="Oldest first")
@click.option("--limit", type=click.IntRange(min=1), default=None)
@click.pass_context
def history(ctx: click.Context, user_id: int, ascending: bool, limit: int | None) -> None:
    """List recorded net worth snapshots."""

    app = _context(ctx)
    snapshots = app.net_worth_repo.list_for_user(
        user_id=user_id, descending=not ascending, limit=limit
    )
    if not snapshots:
        click.echo("No snapshots recorded.")
        return
    for item in snapshots:
        click.echo(f"{item.date:%Y-%m-%d %H:%M}  {item.net_worth:>14.2f} {item.currency}")


@cli.command("settings")
@click.option("--user-id", type=int, required=True)
@click.pass_context
def settings(ctx: click.Context, user_id: int) -> None:
    """Show notification settings, materialising defaults if needed."""

    from .models.notification_settings import NOTIFICATION_DEFAULTS

    app = _context(ctx)
    record = app.notification_settings_repo.get_or_create(user_id=user_id)
    for name in NOTIFICATION_DEFAULTS:
        click.echo(f"{name}: {'on' if getattr(record, name) else 'off'}")
    for alert in record.alerts():
        state = "on" if alert.enabled else "off"
        click.echo(f"custom {alert.type} @ {alert.threshold:g}: {state}")


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
