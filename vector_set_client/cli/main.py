"""
Main CLI entry point for the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

# mypy: ignore-errors

import functools
import json
from pathlib import Path
from typing import Any, Callable, Optional

import click

from ..core.config import ClientConfig, load_config
from ..core.exceptions import VectorClientError
from ..core.vector_client import VectorSetClient
from ..logging import setup_logging


def _build_config(
    config_path: Optional[Path],
    host: Optional[str],
    port: Optional[int],
    db: Optional[int],
    password: Optional[str],
) -> ClientConfig:
    """Load config file (if any) and apply command-line overrides."""
    base = load_config(config_path) if config_path else ClientConfig()
    overrides = {
        k: v
        for k, v in {"host": host, "port": port, "database": db, "password": password}.items()
        if v is not None
    }
    if not overrides:
        return base
    return ClientConfig(**{**base.model_dump(), **overrides})


def emit(value: Any) -> None:
    """Print a result as JSON."""
    click.echo(json.dumps(value, ensure_ascii=False, indent=2))


def with_client(func: Callable) -> Callable:
    """Pass an open client as first argument and map client errors to CLI errors."""

    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx: click.Context, *args, **kwargs):
        factory = ctx.obj["client_factory"]
        client = factory(ctx.obj["config"])
        try:
            return func(client, *args, **kwargs)
        except VectorClientError as e:
            raise click.ClickException(f"{type(e).__name__}: {e}") from e
        finally:
            client.close()

    return wrapper


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON configuration file",
)
@click.option("--host", "-h", default=None, help="Service host (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Service port (overrides config)")
@click.option("--db", "-n", type=int, default=None, help="Logical database (overrides config)")
@click.option("--password", "-a", default=None, help="Credential (overrides config)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level",
)
@click.pass_context
def cli(ctx, config_path, host, port, db, password, log_level) -> None:
    """Vector set client - add, search and inspect vector indexes."""
    setup_logging(log_level)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = _build_config(config_path, host, port, db, password)
    except (VectorClientError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    ctx.obj.setdefault("client_factory", VectorSetClient)


def _register() -> None:
    from .element_cli import add, getattr_cmd, ismember, rem, setattr_cmd
    from .index_cli import card, dim, info, random_cmd, range_cmd
    from .search_cli import search, search_text

    for command in (
        add,
        rem,
        ismember,
        getattr_cmd,
        setattr_cmd,
        dim,
        card,
        info,
        range_cmd,
        random_cmd,
        search,
        search_text,
    ):
        cli.add_command(command)


_register()


if __name__ == "__main__":
    cli()
