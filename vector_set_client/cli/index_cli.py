"""
CLI commands for whole-index operations.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

# mypy: ignore-errors

import click

from .main import emit, with_client


@click.command()
@click.argument("key")
@with_client
def dim(client, key: str) -> None:
    """Print the dimension of index KEY."""
    emit(client.dimension(key))


@click.command()
@click.argument("key")
@with_client
def card(client, key: str) -> None:
    """Print the number of elements in index KEY."""
    emit(client.cardinality(key))


@click.command()
@click.argument("key")
@click.option("--raw", is_flag=True, help="Print the flat reply instead of a field map")
@with_client
def info(client, key: str, raw: bool) -> None:
    """Print information about index KEY."""
    emit(client.info(key) if raw else client.info_map(key))


@click.command(name="range")
@click.argument("key")
@click.argument("start", default="-")
@click.argument("end", default="+")
@click.option("--count", "-n", type=int, default=10, show_default=True, help="Maximum elements")
@with_client
def range_cmd(client, key: str, start: str, end: str, count: int) -> None:
    """List elements of KEY between START and END (lexicographic)."""
    emit(client.range(key, start, end, count))


@click.command(name="random")
@click.argument("key")
@click.option("--count", "-n", type=int, default=0, help="Number of elements (0 = one)")
@with_client
def random_cmd(client, key: str, count: int) -> None:
    """Print random elements of KEY."""
    emit(client.random_members(key, count))
