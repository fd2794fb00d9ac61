"""Filter graph text for ``-filter_complex``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from ffgraph.models.errors import MultipleConsumersError

from .command_args import FILTER_SEPARATOR, PARAM_SEPARATOR
from .stream_args import input_ref, output_ref

if TYPE_CHECKING:
    from ffgraph.graph.dag import Node, SortedGraph

    from .stream_names import StreamNameTable

logger = logging.getLogger(__name__)


def filter_expr(node: Node) -> str:
    """Return ``name`` or ``name=k1=v1:k2=v2`` for a filter node."""
    if isinstance(node.params, Mapping):
        parts = [f"{key}={value}" for key, value in node.params.items()]
    else:
        parts = list(node.params)
    if not parts:
        return node.name
    return f"{node.name}={PARAM_SEPARATOR.join(parts)}"


def allocate_stream_names(graph: SortedGraph, names: StreamNameTable) -> None:
    """Name every consumed filter output in sorted order.

    Raises:
        MultipleConsumersError: If one output label feeds several consumers.

    """
    for node in graph.transforms:
        for label, consumers in graph.outgoing_map(node).items():
            if len(consumers) > 1:
                raise MultipleConsumersError(node, label, consumers)
            names.allocate(node, label)


def filter_spec(node: Node, graph: SortedGraph, names: StreamNameTable) -> str:
    """Return the filter statement for one node."""
    inputs = "".join(input_ref(names, edge) for edge in node.incoming_edges)
    outputs = "".join(output_ref(names, edge) for edge in graph.outgoing_edges(node))
    return f"{inputs}{filter_expr(node)}{outputs}"


def build(graph: SortedGraph, names: StreamNameTable) -> str:
    """Return the complete filter graph text; empty when there are no filters."""
    allocate_stream_names(graph, names)
    specs = [filter_spec(node, graph, names) for node in graph.transforms]
    logger.debug("Rendered %d filter statement(s) with %d named output(s)", len(specs), len(names.outputs))
    return FILTER_SEPARATOR.join(specs)
