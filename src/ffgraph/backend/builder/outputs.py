"""Output node arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .stream_args import input_ref, map_args, param_args

if TYPE_CHECKING:
    from ffgraph.graph.dag import Node

    from .stream_names import StreamNameTable

DEFAULT_STREAM_REF = "0"  #: FFmpeg maps the first input implicitly.


def map_refs(node: Node, names: StreamNameTable) -> tuple[str, ...]:
    """Return ``-map`` args for an output, omitting the implicit default."""
    edges = node.incoming_edges
    args: tuple[str, ...] = ()
    for edge in edges:
        ref = input_ref(names, edge, final=True)
        if ref != DEFAULT_STREAM_REF or len(edges) > 1:
            args = args + map_args(ref)
    return args


def sink_args(node: Node, names: StreamNameTable) -> tuple[str, ...]:
    """Return maps, options and the path for one output."""
    return (*map_refs(node, names), *param_args(node.params), str(node.path))


def build(sinks: list[Node], names: StreamNameTable) -> tuple[str, ...]:
    """Return args for all outputs."""
    args: tuple[str, ...] = ()
    for node in sinks:
        args = args + sink_args(node, names)
    return args
