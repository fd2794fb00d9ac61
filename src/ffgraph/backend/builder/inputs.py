"""Source node arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .command_args import INPUT_FLAG
from .stream_args import param_args

if TYPE_CHECKING:
    from ffgraph.graph.dag import Node

    from .stream_names import StreamNameTable


def source_args(node: Node) -> tuple[str, ...]:
    """Return the options of one source followed by ``-i <path>``."""
    return (*param_args(node.params), *INPUT_FLAG, str(node.path))


def build(sources: list[Node], names: StreamNameTable) -> tuple[str, ...]:
    """Return args for all sources and register their positional names."""
    args: tuple[str, ...] = ()
    for index, node in enumerate(sources):
        names.add_source(node, index)
        args = args + source_args(node)
    return args
