"""PokeCatch CLI: run the server and manage the database.

Usage:
    pokecatch serve                       # Run the API with uvicorn
    pokecatch serve --port 9000 --reload  # Dev mode
    pokecatch init-db                     # Create tables from the ORM models
    pokecatch issue-token <user-uuid>     # Mint a bearer token for debugging
"""

from __future__ import annotations

import asyncio
import logging
import uuid

import click

from pokecatch import __version__
from pokecatch.config import settings


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="pokecatch")
@click.option("--log-level", default="info", show_default=True, help="Root log level")
def main(log_level: str):
    """PokeCatch: catch Pokemon, keep a collection."""
    _configure_logging(log_level)


@main.command()
@click.option("--host", default=settings.host, show_default=True)
@click.option("--port", default=settings.port, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("pokecatch.main:app", host=host, port=port, reload=reload)


@main.command("init-db")
def init_db():
    """Create any missing tables in POKECATCH_DATABASE_URL."""
    from pokecatch.db.engine import build_engine, create_tables

    async def _init():
        engine = build_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    click.secho("Tables created.", fg="green")


@main.command("issue-token")
@click.argument("user_id")
def issue_token(user_id: str):
    """Print a bearer token for USER_ID signed with the configured secret."""
    from pokecatch.auth.jwt import TokenCodec

    try:
        subject = uuid.UUID(user_id)
    except ValueError:
        raise click.BadParameter("must be a UUID", param_hint="USER_ID")

    click.echo(TokenCodec.from_settings(settings).issue(subject))


if __name__ == "__main__":
    main()
