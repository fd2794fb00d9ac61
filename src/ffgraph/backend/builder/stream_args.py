"""Stream reference and parameter argument helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from ffgraph.models.types import NodeKind

from .command_args import MAP, PARAM_SEPARATOR

if TYPE_CHECKING:
    from ffgraph.graph.dag import Edge, Params

    from .stream_names import StreamNameTable


def param_args(params: Params) -> tuple[str, ...]:
    """Return ``-key value`` pairs for a mapping, or a literal sequence as is."""
    if isinstance(params, Mapping):
        return tuple(arg for key, value in params.items() for arg in (f"-{key}", value))
    return tuple(params)


def input_ref(names: StreamNameTable, edge: Edge, *, final: bool = False) -> str:
    """Return the reference text for the stream feeding ``edge``.

    Args:
        names: Stream names allocated for this compile.
        edge: Incoming edge of a filter or output node.
        final: Whether the reference is an output ``-map`` argument. Final
            references to a source are written bare, e.g. ``0:v``.

    Returns:
        ``[0]``, ``[0:v]``, ``[s1]`` or, when ``final``, ``0`` / ``0:v``.

    """
    name = names.name_of(edge.upstream_node, edge.upstream_label)
    suffix = "" if edge.upstream_selector is None else f"{PARAM_SEPARATOR}{edge.upstream_selector.value}"
    if final and edge.upstream_node.kind is NodeKind.SOURCE:
        return f"{name}{suffix}"
    return f"[{name}{suffix}]"


def output_ref(names: StreamNameTable, edge: Edge) -> str:
    """Return the bracketed name of the filter output carried by ``edge``."""
    return f"[{names.name_of(edge.upstream_node, edge.upstream_label)}]"


def map_args(ref: str) -> tuple[str, ...]:
    """Return ``-map`` argument for a stream reference."""
    return (*MAP, ref)
