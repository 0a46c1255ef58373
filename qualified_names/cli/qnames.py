"""Command line access to table discovery and name quoting."""

from __future__ import annotations

from typing import Optional, Tuple

import click

from ..catalog import CatalogEnumerator
from ..config import Config, ConnectionConfig, load_config
from ..connections import MetadataConnection, create_connection
from ..errors import ConfigError
from ..utils.logging import setup_logging


def _load_config_bundle(config_path: Optional[str]) -> Tuple[Config, Optional[str]]:
    if config_path:
        config = load_config(config_path)
        return config, None
    config = _build_default_config()
    note = "Using in-memory DuckDB connection with demo tables."
    return config, note


def _build_default_config() -> Config:
    config = Config()
    conn_config = ConnectionConfig(
        name="duckdb_mem",
        type="duckdb",
        config={"path": ":memory:", "read_only": False},
    )
    config.connections[conn_config.name] = conn_config
    config.default_connection = conn_config.name
    return config


def _open_connection(conn_config: ConnectionConfig, seed_demo: bool) -> MetadataConnection:
    connection = create_connection(conn_config.name, conn_config.type, conn_config.config)
    connection.connect()
    if seed_demo:
        _seed_demo_data(connection)
    return connection


def _seed_demo_data(connection: MetadataConnection) -> None:
    raw = connection.connection
    if raw is None:
        return
    raw.execute('CREATE SCHEMA IF NOT EXISTS "sales.eu"')
    raw.execute(
        """
        CREATE TABLE IF NOT EXISTS demo_users (
            id INTEGER,
            name VARCHAR,
            city VARCHAR
        )
        """
    )
    raw.execute(
        """
        CREATE TABLE IF NOT EXISTS "sales.eu".orders (
            id INTEGER,
            user_id INTEGER,
            amount DOUBLE
        )
        """
    )
    raw.execute("CREATE OR REPLACE VIEW demo_cities AS SELECT DISTINCT city FROM demo_users")


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file. Defaults to an in-memory DuckDB demo.",
)
@click.option("--connection", "connection_name", help="Connection name from the config file.")
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    connection_name: Optional[str],
    log_level: Optional[str],
) -> None:
    """Discover tables and columns, and quote qualified names."""
    config, note = _load_config_bundle(config_path)
    setup_logging(
        level=log_level or config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )
    try:
        conn_config = config.get_connection(connection_name)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    if note:
        click.echo(note, err=True)
    connection = _open_connection(conn_config, seed_demo=note is not None)
    ctx.call_on_close(connection.disconnect)
    ctx.obj = CatalogEnumerator(connection)


@cli.command()
@click.pass_obj
def tables(enumerator: CatalogEnumerator) -> None:
    """List tables and views."""
    for name in enumerator.list_tables_and_views():
        click.echo(name)


@cli.command()
@click.argument("table_name")
@click.pass_obj
def columns(enumerator: CatalogEnumerator, table_name: str) -> None:
    """List the columns of TABLE_NAME."""
    names = enumerator.list_columns(table_name)
    if names is None:
        click.echo(f"Columns of {table_name} are unknown; select all columns.", err=True)
        return
    for name in names:
        click.echo(name)


@cli.command()
@click.argument("name")
@click.pass_obj
def quote(enumerator: CatalogEnumerator, name: str) -> None:
    """Print NAME fully quoted for use in a query."""
    click.echo(enumerator.prepare_name_for_sql(name))


@cli.command()
@click.argument("name")
@click.pass_obj
def split(enumerator: CatalogEnumerator, name: str) -> None:
    """Print the unquoted parts of NAME, outermost first."""
    parts = enumerator.split_name(name)
    if parts is None:
        click.echo(f"{name} is not a well formed qualified name; it is used literally.", err=True)
        return
    for part in parts:
        click.echo(part)
