"""Command-line entry point for flagsync.

Examples::

    flagsync init
    flagsync set dark_mode beta_checkout
    flagsync check dark_mode
    flagsync list
    flagsync set            # no names: remove every flag
"""
from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click

from flagsync import __version__
from flagsync.adapters.sqlalchemy import SqlAlchemyRecordStore
from flagsync.application.feature_flags import FlagRegistry
from flagsync.config.settings import DotenvSettingsLoader, FlagSettings, SettingsFactory
from flagsync.kernel.errors import BaseError
from flagsync.observability.logging import JsonLoggerFactory, get_logger

T = TypeVar("T")

EXIT_DISABLED = 1
EXIT_ERROR = 2

logger = get_logger(__name__)


def _run(settings: FlagSettings, action: Callable[[SqlAlchemyRecordStore], Awaitable[T]]) -> T:
    """Run *action* against a store opened from *settings*, mapping errors to exit codes."""

    async def main() -> T:
        store = SqlAlchemyRecordStore.from_url(settings.database_url)
        try:
            return await action(store)
        finally:
            await store.dispose()

    try:
        return asyncio.run(main())
    except BaseError as exc:
        logger.debug("cli_command_failed", exc=exc)
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(version=__version__)
@click.option("--database-url", help="SQLAlchemy async URL (overrides FLAGS_DATABASE_URL).")
@click.option("--collection", help="Flag collection name (overrides FLAGS_COLLECTION_NAME).")
@click.option("--env-file", default=".env", show_default=True, help="Dotenv file to load first.")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None, collection: str | None, env_file: str) -> None:
    """flagsync - reconcile feature flags stored in a database."""
    try:
        settings = SettingsFactory.create(
            FlagSettings,
            loaders=[DotenvSettingsLoader(env_file)],
            overrides={"database_url": database_url, "collection_name": collection},
        )
    except BaseError as exc:
        raise click.UsageError(exc.message) from exc
    JsonLoggerFactory.configure(settings.log_level, json=settings.log_json)
    ctx.obj = settings


@cli.command("init")
@click.pass_obj
def init_cmd(settings: FlagSettings) -> None:
    """Create the flag collection if it does not exist."""

    async def action(store: SqlAlchemyRecordStore) -> Any:
        return await store.create_collection(settings.collection_name)

    _run(settings, action)
    click.echo(f"Collection '{settings.collection_name}' is ready.")


@cli.command("list")
@click.pass_obj
def list_cmd(settings: FlagSettings) -> None:
    """Print every enabled flag, one per line."""

    async def action(store: SqlAlchemyRecordStore) -> list[str]:
        return await FlagRegistry(store, settings.collection_name).list_flags()

    for name in _run(settings, action):
        click.echo(name)


@cli.command("check")
@click.argument("name")
@click.pass_obj
def check_cmd(settings: FlagSettings, name: str) -> None:
    """Exit 0 if NAME is enabled, 1 otherwise."""

    async def action(store: SqlAlchemyRecordStore) -> bool:
        return await FlagRegistry(store, settings.collection_name).is_enabled(name)

    enabled = _run(settings, action)
    click.echo("enabled" if enabled else "disabled")
    if not enabled:
        sys.exit(EXIT_DISABLED)


@cli.command("set")
@click.argument("names", nargs=-1)
@click.pass_obj
def set_cmd(settings: FlagSettings, names: tuple[str, ...]) -> None:
    """Make NAMES the complete set of enabled flags.

    Flags not listed are removed; with no NAMES every flag is removed.
    """

    async def action(store: SqlAlchemyRecordStore) -> Any:
        return await FlagRegistry(store, settings.collection_name).set_flags(names)

    result = _run(settings, action)
    for name in result.added:
        click.echo(f"+ {name}")
    for name in result.removed:
        click.echo(f"- {name}")
    if not result.changed:
        click.echo("No changes.")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
