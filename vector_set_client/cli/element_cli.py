"""
CLI commands for element operations.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

# mypy: ignore-errors

from typing import List, Optional

import click

from .main import emit, with_client


def parse_floats(text: str) -> List[float]:
    """Parse whitespace or comma separated floats."""
    try:
        return [float(p) for p in text.replace(",", " ").split()]
    except ValueError as e:
        raise click.BadParameter(f"not a list of numbers: {text!r}") from e


@click.command()
@click.argument("key")
@click.argument("element")
@click.option("--vector", "-v", required=True, help='Embedding values, e.g. "0.1 0.2 0.3"')
@click.option("--attrs", default=None, help="JSON attributes")
@click.option(
    "--quant",
    type=click.Choice(["NOQUANT", "Q8", "BIN"], case_sensitive=False),
    default=None,
    help="Storage quantization",
)
@click.option("--reduce", "reduce_dim", type=int, default=None, help="Projection dimension")
@click.option("--ef", type=int, default=None, help="Build exploration factor")
@click.option("--m", "m", type=int, default=None, help="Max links per node")
@click.option("--cas", is_flag=True, help="Threaded check-and-set insert")
@with_client
def add(
    client,
    key: str,
    element: str,
    vector: str,
    attrs: Optional[str],
    quant: Optional[str],
    reduce_dim: Optional[int],
    ef: Optional[int],
    m: Optional[int],
    cas: bool,
) -> None:
    """Add ELEMENT with an embedding to index KEY."""
    values = parse_floats(vector)
    emit(
        client.add(
            key,
            len(values),
            values,
            element,
            reduce_dim=reduce_dim,
            quantization=quant.upper() if quant else None,
            cas=cas,
            ef=ef,
            attributes=attrs,
            m=m,
        )
    )


@click.command()
@click.argument("key")
@click.argument("element")
@with_client
def rem(client, key: str, element: str) -> None:
    """Remove ELEMENT from index KEY."""
    emit(client.remove(key, element))


@click.command()
@click.argument("key")
@click.argument("element")
@with_client
def ismember(client, key: str, element: str) -> None:
    """Check whether ELEMENT is in index KEY."""
    emit(client.is_member(key, element))


@click.command(name="getattr")
@click.argument("key")
@click.argument("element")
@with_client
def getattr_cmd(client, key: str, element: str) -> None:
    """Print the attributes of ELEMENT (null when unset)."""
    emit(client.get_attributes(key, element))


@click.command(name="setattr")
@click.argument("key")
@click.argument("element")
@click.argument("attributes", required=False)
@with_client
def setattr_cmd(client, key: str, element: str, attributes: Optional[str]) -> None:
    """Set the attributes of ELEMENT; omit ATTRIBUTES to clear them."""
    emit(client.set_attributes(key, element, attributes))
