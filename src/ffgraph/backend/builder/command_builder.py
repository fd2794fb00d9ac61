"""Compile a pipeline graph into an FFmpeg argument vector."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ffgraph.graph.dag import topo_sort
from ffgraph.graph.streams import Stream, terminal_nodes
from ffgraph.models.errors import GraphError
from ffgraph.models.options.defaults import DEFAULT_CMD

from . import filters, inputs, outputs
from .command_args import FILTER_COMPLEX, HIDE_BANNER, OVERWRITE_OUTPUT
from .stream_names import StreamNameTable

logger = logging.getLogger(__name__)


def build_command(
    streams: Stream | Iterable[Stream],
    *,
    cmd: str = DEFAULT_CMD,
    overwrite_output: bool = True,
) -> tuple[str, ...]:
    """Return the FFmpeg command for the graph ending in ``streams``.

    Nothing is returned on failure; every graph check runs before the
    vector is assembled.

    Raises:
        CycleDetectedError: If the graph has a cycle.
        MultipleConsumersError: If a filter output feeds several consumers.

    """
    graph = topo_sort(terminal_nodes(streams))
    names = StreamNameTable()
    source_args = inputs.build(graph.sources, names)
    filter_text = filters.build(graph, names)
    sink_args = outputs.build(graph.sinks, names)

    args = (cmd, *HIDE_BANNER) + source_args
    if filter_text:
        args = args + FILTER_COMPLEX + (filter_text,)
    args = args + sink_args
    if overwrite_output:
        args = args + OVERWRITE_OUTPUT
    logger.debug(
        "Compiled %d node(s): %d source(s), %d filter(s), %d output(s)",
        len(graph.nodes),
        len(graph.sources),
        len(graph.transforms),
        len(graph.sinks),
    )
    return args


def compile(  # noqa: A001
    streams: Stream | Iterable[Stream],
    cmd: str = DEFAULT_CMD,
    *,
    overwrite_output: bool = True,
) -> list[str]:
    """Return the FFmpeg command as a list ready for ``subprocess``."""
    return list(build_command(streams, cmd=cmd, overwrite_output=overwrite_output))


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling a graph without raising."""

    args: tuple[str, ...] = ()
    error: GraphError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def try_compile(
    streams: Stream | Iterable[Stream],
    *,
    cmd: str = DEFAULT_CMD,
    overwrite_output: bool = True,
) -> CompileResult:
    """Compile ``streams``, capturing graph errors in the result."""
    try:
        args = build_command(streams, cmd=cmd, overwrite_output=overwrite_output)
    except GraphError as e:
        logger.debug("Compile failed: %s", e)
        return CompileResult(error=e)
    return CompileResult(args=args)


__all__ = ["DEFAULT_CMD", "CompileResult", "build_command", "compile", "try_compile"]
