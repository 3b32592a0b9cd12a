"""
CLI commands for similarity search.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

# mypy: ignore-errors

from typing import Optional

import click

from ..core.embedding_client import HttpEmbeddingClient
from ..core.semantic_index import SemanticIndex
from ..core.vector_client import ByElementId, ByValueList
from .element_cli import parse_floats
from .main import emit, with_client


@click.command()
@click.argument("key")
@click.option("--element", "-e", default=None, help="Search by an existing element")
@click.option("--vector", "-v", default=None, help='Query values, e.g. "0.1 0.2 0.3"')
@click.option("--count", "-n", type=int, default=10, show_default=True, help="Maximum hits")
@click.option("--epsilon", type=float, default=None, help="Maximum distance in [0, 1]")
@click.option("--ef", type=int, default=None, help="Search exploration factor")
@click.option("--filter", "filter_expr", default=None, help="Attribute filter expression")
@click.option("--filter-ef", type=int, default=None, help="Filtered search effort")
@click.option("--with-scores", is_flag=True, help="Include scores")
@click.option("--with-attribs", is_flag=True, help="Include attributes")
@click.option("--truth", is_flag=True, help="Exact linear scan")
@with_client
def search(
    client,
    key: str,
    element: Optional[str],
    vector: Optional[str],
    count: int,
    epsilon: Optional[float],
    ef: Optional[int],
    filter_expr: Optional[str],
    filter_ef: Optional[int],
    with_scores: bool,
    with_attribs: bool,
    truth: bool,
) -> None:
    """Find elements of KEY similar to --element or --vector."""
    if (element is None) == (vector is None):
        raise click.UsageError("Exactly one of --element or --vector is required")
    if element is not None:
        source = ByElementId(element)
    else:
        source = ByValueList.from_vector(parse_floats(vector))
    kwargs = dict(
        filter=filter_expr,
        count=count,
        epsilon=epsilon,
        ef=ef,
        filter_ef=filter_ef,
        truth=truth,
    )
    if with_scores or with_attribs:
        records = client.similar_records(
            key, source, with_scores=with_scores, with_attribs=with_attribs, **kwargs
        )
        emit([r.to_dict() for r in records])
    else:
        emit(client.similar(key, source, **kwargs))


@click.command(name="search-text")
@click.argument("key")
@click.argument("query")
@click.option("--count", "-n", type=int, default=5, show_default=True, help="Maximum hits")
@click.option("--epsilon", type=float, default=0.25, show_default=True, help="Maximum distance")
@click.option("--filter", "filter_expr", default=None, help="Attribute filter expression")
@with_client
def search_text(
    client, key: str, query: str, count: int, epsilon: float, filter_expr: Optional[str]
) -> None:
    """Embed QUERY with the configured embedding service and search KEY."""
    if client.config.embedding is None:
        raise click.UsageError("No 'embedding' section in configuration")
    embedder = HttpEmbeddingClient(client.config.embedding)
    try:
        index = SemanticIndex(client, embedder, key)
        records = index.search(query, count=count, epsilon=epsilon, filter=filter_expr)
    finally:
        embedder.close()
    emit([r.to_dict() for r in records])
