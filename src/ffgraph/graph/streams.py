"""Stream handles and the fluent graph construction API."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from ffgraph.models.errors import InvalidStreamKindError, SelectorAlreadyAppliedError
from ffgraph.models.types import NODE_STREAM_KINDS, Label, NodeKind, Selector, StreamKind

from .dag import Node, ParamsInput, UpstreamRef
from .hashing import label_hash

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ffgraph.backend.executor import FFmpegResult
    from ffgraph.models.options import RuntimeOptions

INPUT_NODE_NAME = "input"
OUTPUT_NODE_NAME = "output"


@dataclass(frozen=True, eq=False, slots=True)
class Stream:
    """Output ``label`` of ``node``, optionally narrowed by ``selector``."""

    kind: ClassVar[StreamKind]

    node: Node
    label: Label = ""
    selector: Selector | None = None
    hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", label_hash(self.node.hash, self.label))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stream):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return self.hash

    def get(self, item: Selector | str) -> Stream:
        """Return this stream narrowed to one component.

        Raises:
            SelectorAlreadyAppliedError: If a selector is already applied.
            ValueError: If ``item`` is not a known selector.

        """
        if self.selector is not None:
            raise SelectorAlreadyAppliedError(self.selector)
        return stream_for(self.node, self.label, Selector(item))

    def __getitem__(self, item: Selector | str) -> Stream:
        return self.get(item)

    def audio(self) -> Stream:
        return self.get(Selector.AUDIO)

    def video(self) -> Stream:
        return self.get(Selector.VIDEO)

    @property
    def upstream_ref(self) -> UpstreamRef:
        return UpstreamRef(self.node, self.label, self.selector)


@dataclass(frozen=True, eq=False, slots=True)
class FilterableStream(Stream):
    """A stream that can feed further filters or an output."""

    kind: ClassVar[StreamKind] = StreamKind.FILTERABLE

    def filter(self, name: str, params: ParamsInput = None) -> FilterableStream:
        return filter(self, name, params)

    def filter_multi_output(self, name: str, params: ParamsInput = None) -> NodeOutputs:
        return filter_multi_output(self, name, params)

    def output(self, path: str, params: ParamsInput = None) -> OutputStream:
        return output(self, path, params)


@dataclass(frozen=True, eq=False, slots=True)
class OutputStream(Stream):
    """A stream produced by an output node; ready to compile."""

    kind: ClassVar[StreamKind] = StreamKind.OUTPUT

    def compile(self, cmd: str = "ffmpeg", *, overwrite_output: bool = True) -> list[str]:
        from ffgraph.backend.builder import compile as compile_graph  # noqa: PLC0415

        return compile_graph(self, cmd=cmd, overwrite_output=overwrite_output)

    def run(
        self,
        cmd: str = "ffmpeg",
        *,
        overwrite_output: bool = True,
        runtime: RuntimeOptions | None = None,
        status_callback: Callable[[str], None] | None = None,
    ) -> FFmpegResult:
        from ffgraph.backend.executor import run  # noqa: PLC0415

        return run(
            self,
            cmd=cmd,
            overwrite_output=overwrite_output,
            runtime=runtime,
            status_callback=status_callback,
        )


_STREAM_TYPES: dict[StreamKind, type[Stream]] = {
    StreamKind.FILTERABLE: FilterableStream,
    StreamKind.OUTPUT: OutputStream,
}


def stream_for(
    node: Node,
    label: Label = "",
    selector: Selector | None = None,
    *,
    kind: StreamKind | None = None,
) -> Stream:
    """Return the stream handle for output ``label`` of ``node``.

    Raises:
        InvalidStreamKindError: If ``kind`` (or the kind implied by the node)
            has no stream type.

    """
    resolved = NODE_STREAM_KINDS.get(node.kind) if kind is None else kind
    stream_type = _STREAM_TYPES.get(resolved)  # type: ignore[arg-type]
    if stream_type is None:
        raise InvalidStreamKindError(resolved)
    return stream_type(node, label, selector)


class NodeOutputs:
    """Labelled outputs of a multi-output filter, e.g. ``split``."""

    def __init__(self, node: Node) -> None:
        self.node = node

    def stream(self, label: Label | int = "", selector: Selector | None = None) -> FilterableStream:
        return stream_for(self.node, str(label), selector)  # type: ignore[return-value]

    def __getitem__(self, label: Label | int) -> FilterableStream:
        return self.stream(label)


def _upstream_map(streams: Stream | Sequence[Stream]) -> dict[Label, UpstreamRef]:
    """Wire one stream to label ``""`` or several to ``"0"``, ``"1"``, ..."""
    if isinstance(streams, Stream):
        return {"": streams.upstream_ref}
    return {str(i): s.upstream_ref for i, s in enumerate(streams)}


def input(path: str, params: ParamsInput = None) -> FilterableStream:  # noqa: A001
    """Return the stream of a new source reading ``path``."""
    node = Node.create(NodeKind.SOURCE, INPUT_NODE_NAME, params, path=path)
    return stream_for(node)  # type: ignore[return-value]


def filter_multi_output(streams: Stream | Sequence[Stream], name: str, params: ParamsInput = None) -> NodeOutputs:
    """Add filter ``name`` and return its labelled outputs."""
    node = Node.create(NodeKind.TRANSFORM, name, params, _upstream_map(streams))
    return NodeOutputs(node)


def filter(streams: Stream | Sequence[Stream], name: str, params: ParamsInput = None) -> FilterableStream:  # noqa: A001
    """Add filter ``name`` and return its default output."""
    return filter_multi_output(streams, name, params).stream()


def output(streams: Stream | Sequence[Stream], path: str, params: ParamsInput = None) -> OutputStream:
    """Add a sink writing ``path`` from ``streams``."""
    node = Node.create(NodeKind.SINK, OUTPUT_NODE_NAME, params, _upstream_map(streams), path=path)
    return stream_for(node)  # type: ignore[return-value]


def terminal_nodes(streams: Stream | Iterable[Stream]) -> list[Node]:
    """Return the distinct nodes behind ``streams`` in first-seen order."""
    if isinstance(streams, Stream):
        streams = (streams,)
    nodes: dict[Node, None] = {}
    for s in streams:
        nodes.setdefault(s.node, None)
    return list(nodes)


__all__ = [
    "FilterableStream",
    "NodeOutputs",
    "OutputStream",
    "Stream",
    "filter",
    "filter_multi_output",
    "input",
    "output",
    "stream_for",
    "terminal_nodes",
]
