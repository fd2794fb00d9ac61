"""Errors raised while building or compiling a pipeline graph.

All of them signal a malformed graph or API misuse. None are transient, so
callers should fix the graph rather than retry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ffgraph.graph.dag import DownstreamRef, Node


class GraphError(ValueError):
    """Base class for pipeline graph errors."""


class CycleDetectedError(GraphError):
    """A node was reached again while still on the traversal path."""

    def __init__(self, node: Node) -> None:
        self.node = node
        super().__init__(f"Graph is not a DAG: cycle through {node.kind.value} node '{node.name}'")


class MultipleConsumersError(GraphError):
    """A transform output label feeds more than one downstream edge."""

    def __init__(self, node: Node, label: str, consumers: Sequence[DownstreamRef]) -> None:
        self.node = node
        self.label = label
        self.consumers = tuple(consumers)
        names = ", ".join(f"'{c.node.name}'" for c in self.consumers)
        super().__init__(
            f"Output '{label}' of filter '{node.name}' has {len(self.consumers)} consumers ({names}); "
            "each filter output can feed only one consumer"
        )


class InvalidStreamKindError(GraphError):
    """A stream handle of an unknown kind was requested."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"No stream type for kind: {kind!r}")


class SelectorAlreadyAppliedError(GraphError):
    """A selector was applied to a stream that already carries one."""

    def __init__(self, selector: object) -> None:
        self.selector = selector
        super().__init__(f"Stream is already selected ('{getattr(selector, 'value', selector)}')")


__all__ = [
    "CycleDetectedError",
    "GraphError",
    "InvalidStreamKindError",
    "MultipleConsumersError",
    "SelectorAlreadyAppliedError",
]
