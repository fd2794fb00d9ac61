"""Immutable pipeline graph nodes and topological ordering.

Nodes are connected by edges carrying a label on each side: the upstream
node's output label and the downstream node's input label. A node stores only
its incoming edges; the outgoing view is rebuilt on every compile by walking
back from the terminal nodes.

     _____               _____
    |     |             |     |
    |  A  >[foo]---[bar]>  B  |
    |_____|             |_____|

A node has at most one incoming edge per label. Nodes never change after
construction; build a new node instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from ffgraph.models.errors import CycleDetectedError
from ffgraph.models.types import Label, NodeKind, Selector

from .hashing import node_hash

Params: TypeAlias = Mapping[str, str] | tuple[str, ...]
ParamsInput: TypeAlias = Mapping[str, object] | Sequence[object] | None
OutgoingEdgeMap: TypeAlias = dict[Label, list["DownstreamRef"]]


@dataclass(frozen=True, slots=True)
class UpstreamRef:
    """The stream feeding one incoming edge."""

    node: Node
    label: Label = ""
    selector: Selector | None = None


@dataclass(frozen=True, slots=True)
class DownstreamRef:
    """One consumer of an upstream output label."""

    node: Node
    label: Label
    selector: Selector | None = None


@dataclass(frozen=True, slots=True)
class Edge:
    """A single connection between two nodes."""

    upstream_node: Node
    upstream_label: Label
    upstream_selector: Selector | None
    downstream_node: Node
    downstream_label: Label


def normalize_params(params: ParamsInput) -> Params:
    """Return an immutable, string-valued copy of ``params``."""
    if params is None:
        return MappingProxyType({})
    if isinstance(params, Mapping):
        return MappingProxyType({str(k): str(v) for k, v in params.items()})
    if isinstance(params, str):
        raise TypeError("params must be a mapping or a sequence of arguments, not a string")
    return tuple(str(v) for v in params)


@dataclass(frozen=True, eq=False, slots=True)
class Node:
    """A source, transform or sink in a pipeline graph.

    Two nodes are equal when their structural hashes match.
    """

    kind: NodeKind
    name: str
    params: Params
    upstreams: tuple[tuple[Label, UpstreamRef], ...] = ()
    path: str | None = None
    hash: int = field(init=False, repr=False)
    incoming_edges: tuple[Edge, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", node_hash(self.kind, self.name, self.params, self.path, self.upstreams))
        edges = tuple(
            Edge(
                upstream_node=ref.node,
                upstream_label=ref.label,
                upstream_selector=ref.selector,
                downstream_node=self,
                downstream_label=label,
            )
            for label, ref in self.upstreams
        )
        object.__setattr__(self, "incoming_edges", edges)

    @classmethod
    def create(
        cls,
        kind: NodeKind,
        name: str,
        params: ParamsInput = None,
        upstreams: Mapping[Label, UpstreamRef] | None = None,
        path: str | None = None,
    ) -> Node:
        """Build a node, normalizing parameters and freezing the edge map."""
        edge_map = dict(upstreams or {})
        return cls(
            kind=kind,
            name=name,
            params=normalize_params(params),
            upstreams=tuple(edge_map.items()),
            path=None if path is None else str(path),
        )

    @property
    def incoming_edge_map(self) -> Mapping[Label, UpstreamRef]:
        """Read-only view of the incoming edges keyed by downstream label."""
        return MappingProxyType(dict(self.upstreams))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return self.hash

    def __repr__(self) -> str:
        return f"Node({self.kind.value}, {self.name!r}, {self.hash:016x})"


@dataclass(slots=True)
class SortedGraph:
    """Nodes in dependency order plus their derived outgoing edges."""

    nodes: list[Node] = field(default_factory=list)
    outgoing: dict[Node, OutgoingEdgeMap] = field(default_factory=dict)

    def _of_kind(self, kind: NodeKind) -> list[Node]:
        return [n for n in self.nodes if n.kind is kind]

    @property
    def sources(self) -> list[Node]:
        return self._of_kind(NodeKind.SOURCE)

    @property
    def transforms(self) -> list[Node]:
        return self._of_kind(NodeKind.TRANSFORM)

    @property
    def sinks(self) -> list[Node]:
        return self._of_kind(NodeKind.SINK)

    def outgoing_map(self, node: Node) -> OutgoingEdgeMap:
        """Return ``node``'s outgoing edges keyed by upstream label."""
        return self.outgoing.get(node, {})

    def outgoing_edges(self, node: Node) -> list[Edge]:
        """Return ``node``'s outgoing edges in registration order."""
        return [
            Edge(
                upstream_node=node,
                upstream_label=label,
                upstream_selector=consumer.selector,
                downstream_node=consumer.node,
                downstream_label=consumer.label,
            )
            for label, consumers in self.outgoing_map(node).items()
            for consumer in consumers
        ]


def _record_outgoing(outgoing: dict[Node, OutgoingEdgeMap], edge: Edge) -> None:
    consumers = outgoing.setdefault(edge.upstream_node, {}).setdefault(edge.upstream_label, [])
    consumers.append(DownstreamRef(edge.downstream_node, edge.downstream_label, edge.upstream_selector))


def topo_sort(terminals: Iterable[Node]) -> SortedGraph:
    """Order nodes so every upstream precedes its consumers.

    Depth-first from each terminal in the given order, following incoming
    edges in registration order. Every traversed edge is recorded in the
    upstream node's outgoing map, including edges into nodes that are already
    sorted, so shared nodes see all of their consumers.

    Raises:
        CycleDetectedError: If a node is reached while still in progress.

    """
    graph = SortedGraph()
    done: set[Node] = set()
    in_progress: set[Node] = set()

    for terminal in terminals:
        if terminal in done:
            continue
        in_progress.add(terminal)
        stack: list[tuple[Node, Iterator[Edge]]] = [(terminal, iter(terminal.incoming_edges))]
        while stack:
            node, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                in_progress.discard(node)
                done.add(node)
                graph.nodes.append(node)
                continue
            _record_outgoing(graph.outgoing, edge)
            upstream = edge.upstream_node
            if upstream in done:
                continue
            if upstream in in_progress:
                raise CycleDetectedError(upstream)
            in_progress.add(upstream)
            stack.append((upstream, iter(upstream.incoming_edges)))

    return graph


__all__ = [
    "DownstreamRef",
    "Edge",
    "Node",
    "OutgoingEdgeMap",
    "Params",
    "ParamsInput",
    "SortedGraph",
    "UpstreamRef",
    "normalize_params",
    "topo_sort",
]
