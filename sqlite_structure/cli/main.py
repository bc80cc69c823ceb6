"""CLI commands for sqlite-structure."""

import logging
import sqlite3
import sys
from contextlib import closing
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from sqlite_structure.config import CONFIG_FILENAME, LOG_LEVELS, Config, DatabaseConfig, parse_attach
from sqlite_structure.core.models import structure_to_json
from sqlite_structure.core.storage import SQLiteStorage, connect
from sqlite_structure.core.structure import describe as describe_structure
from sqlite_structure.exceptions import ConfigError, SqliteStructureError

logger = logging.getLogger(__name__)


def _load_config(config_path: Optional[str]) -> Config:
    if config_path is not None:
        return Config.from_toml(config_path)
    return Config.load_or_default()


def _database_config(
    config: Config,
    database: Optional[str],
    attach: tuple[str, ...],
    writable: bool,
) -> DatabaseConfig:
    merged = dict(config.database.attach)
    merged.update(parse_attach(attach))
    try:
        db = DatabaseConfig(
            path=database or config.database.path,
            attach=merged,
            read_only=config.database.read_only and not writable,
        )
    except ValidationError as e:
        raise ConfigError(str(e)) from e
    if db.path is None:
        raise ConfigError(f"No database given on the command line or in {CONFIG_FILENAME}")
    return db


def _fail(error: Exception) -> None:
    first_line = str(error).splitlines()[0] if str(error) else type(error).__name__
    click.echo(f"Error: {first_line}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="sqlite-structure")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from config, else WARNING)",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], config_path: Optional[str]) -> None:
    """sqlite-structure - canonical schema descriptions for SQLite databases."""
    try:
        config = _load_config(config_path)
    except (SqliteStructureError, FileNotFoundError) as e:
        _fail(e)
    logging.basicConfig(
        level=(log_level or config.output.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = config


@cli.command()
@click.argument("database", required=False)
@click.option("--attach", multiple=True, metavar="NAME=PATH", help="Attach another database")
@click.option("--indent", type=int, default=None, help="JSON indent (default: 2)")
@click.option("--compact", is_flag=True, help="Print JSON on a single line")
@click.option("--writable", is_flag=True, help="Open read-write instead of read-only")
@click.pass_obj
def describe(
    config: Config,
    database: Optional[str],
    attach: tuple[str, ...],
    indent: Optional[int],
    compact: bool,
    writable: bool,
) -> None:
    """Print the structure of DATABASE as JSON."""
    try:
        db = _database_config(config, database, attach, writable)
        with closing(connect(db.path, attach=db.attach, read_only=db.read_only)) as conn:
            structure = describe_structure(SQLiteStorage(conn))
    except (SqliteStructureError, sqlite3.Error, ValueError) as e:
        _fail(e)

    if compact:
        indent = None
    elif indent is None:
        indent = config.output.indent
    click.echo(structure_to_json(structure, indent=indent))


@cli.command()
@click.argument("database", required=False)
@click.option("--attach", multiple=True, metavar="NAME=PATH", help="Attach another database")
@click.pass_obj
def tables(config: Config, database: Optional[str], attach: tuple[str, ...]) -> None:
    """List the tables of DATABASE, one per line."""
    try:
        db = _database_config(config, database, attach, writable=False)
        with closing(connect(db.path, attach=db.attach, read_only=db.read_only)) as conn:
            structure = describe_structure(SQLiteStorage(conn))
    except (SqliteStructureError, sqlite3.Error, ValueError) as e:
        _fail(e)

    for table in structure:
        click.echo(f"{table.qualified_name} ({table.type.value})")


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.argument("directory", type=click.Path(file_okay=False), default=".")
def init(force: bool, directory: str) -> None:
    """Write a default sqlite-structure.toml into DIRECTORY."""
    config_path = Path(directory) / CONFIG_FILENAME
    if config_path.exists() and not force:
        click.echo(f"Error: {config_path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)
    Config().to_toml(config_path)
    click.echo(f"✓ Wrote {config_path}")


if __name__ == "__main__":
    cli()
