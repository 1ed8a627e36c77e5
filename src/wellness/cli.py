"""CLI for the wellness tracker: run the API, set up the database, and read data."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Coroutine
from datetime import date, datetime
from pathlib import Path
from typing import Any

import asyncpg
import click

from wellness import __version__
from wellness.config import ConfigError, WellnessConfig, load_config
from wellness.core.logging import configure_logging
from wellness.db import Database
from wellness.errors import WellnessError
from wellness.schema import create_tables

logger = logging.getLogger(__name__)

ANALYTICS_KINDS = ("mood", "habits", "adherence")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to wellness.toml (defaults to $WELLNESS_CONFIG, then ./wellness.toml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """Wellness tracker: mood, medication, supplement, and habit logging."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(
        level=config.logging.level,
        fmt=config.logging.format,
        log_root=config.logging.log_root,
    )
    ctx.obj = config


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to [api].host)")
@click.option("--port", type=int, default=None, help="Bind port (defaults to [api].port)")
@click.pass_obj
def serve(config: WellnessConfig, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from wellness.api.app import create_app

    host = host or config.api.host
    port = port or config.api.port
    click.echo(f"Serving wellness API on http://{host}:{port}")
    uvicorn.run(create_app(config=config), host=host, port=port, log_config=None)


@cli.command("init-db")
@click.pass_obj
def init_db(config: WellnessConfig) -> None:
    """Create the database, schema, and tables if they do not exist."""
    _run_async(_init_db(config))
    click.echo(f"Database {config.database.name} is ready")


@cli.command()
@click.option("--user", "user_id", required=True, help="User whose data is exported")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout",
)
@click.pass_obj
def export(config: WellnessConfig, user_id: str, output_path: Path | None) -> None:
    """Dump everything a user has recorded as JSON."""
    from wellness.tools.export import export_user_data

    snapshot = _run(config, lambda db: export_user_data(db, user_id))
    text = _to_json(snapshot)
    if output_path is None:
        click.echo(text)
    else:
        output_path.write_text(text + "\n")
        click.echo(f"Exported data for {user_id} to {output_path}")


@cli.command()
@click.argument("kind", type=click.Choice(ANALYTICS_KINDS))
@click.option("--user", "user_id", required=True, help="User to summarise")
@click.option("--start", "start_date", type=click.DateTime(["%Y-%m-%d"]), required=True)
@click.option("--end", "end_date", type=click.DateTime(["%Y-%m-%d"]), required=True)
@click.pass_obj
def analytics(
    config: WellnessConfig,
    kind: str,
    user_id: str,
    start_date: datetime,
    end_date: datetime,
) -> None:
    """Print mood, habit, or adherence analytics for an inclusive date range."""
    from wellness.tools import analytics as analytics_tools

    handler = {
        "mood": analytics_tools.mood_analytics,
        "habits": analytics_tools.habit_analytics,
        "adherence": analytics_tools.adherence_analytics,
    }[kind]
    start, end = start_date.date(), end_date.date()
    result = _run(config, lambda db: handler(db, user_id, start, end))
    click.echo(_to_json(result))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _database(config: WellnessConfig) -> Database:
    return Database.from_env(
        db_name=config.database.name,
        schema=config.database.schema,
        min_pool_size=config.database.min_pool_size,
        max_pool_size=config.database.max_pool_size,
    )


async def _init_db(config: WellnessConfig) -> None:
    db = _database(config)
    await db.provision()
    pool = await db.connect()
    try:
        await create_tables(pool)
    finally:
        await db.close()


async def _with_database(
    config: WellnessConfig,
    action: Callable[[Database], Awaitable[Any]],
) -> Any:
    db = _database(config)
    await db.connect()
    try:
        return await action(db)
    finally:
        await db.close()


def _run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run *coro* to completion; domain and database failures become CLI errors."""
    try:
        return asyncio.run(coro)
    except WellnessError as exc:
        raise click.ClickException(str(exc)) from exc
    except OSError as exc:
        raise click.ClickException(f"Cannot reach the database: {exc}") from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise click.ClickException(f"Database error: {exc}") from exc


def _run(config: WellnessConfig, action: Callable[[Database], Awaitable[Any]]) -> Any:
    """Run *action* against a fresh pool."""
    return _run_async(_with_database(config, action))


def _json_default(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=_json_default)
