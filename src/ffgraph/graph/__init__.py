"""Pipeline graph model, identity hashing and ordering."""

from .dag import DownstreamRef, Edge, Node, SortedGraph, UpstreamRef, topo_sort
from .streams import (
    FilterableStream,
    NodeOutputs,
    OutputStream,
    Stream,
    filter,
    filter_multi_output,
    input,
    output,
    stream_for,
    terminal_nodes,
)

__all__ = [
    "DownstreamRef",
    "Edge",
    "FilterableStream",
    "Node",
    "NodeOutputs",
    "OutputStream",
    "SortedGraph",
    "Stream",
    "UpstreamRef",
    "filter",
    "filter_multi_output",
    "input",
    "output",
    "stream_for",
    "terminal_nodes",
    "topo_sort",
]
