"""Node, stream and selector type definitions."""

from enum import Enum

Label = str  #: Edge label on either side of a connection.


class NodeKind(str, Enum):
    """Kinds of node that make up a pipeline graph."""

    SOURCE = "source"
    TRANSFORM = "transform"
    SINK = "sink"


class StreamKind(str, Enum):
    """Kinds of stream handle a node can hand out."""

    FILTERABLE = "filterable"
    OUTPUT = "output"


class Selector(str, Enum):
    """Component of a stream that a reference can be narrowed to."""

    AUDIO = "a"
    VIDEO = "v"
    SUBTITLE = "s"


NODE_STREAM_KINDS: dict[NodeKind, StreamKind] = {
    NodeKind.SOURCE: StreamKind.FILTERABLE,
    NodeKind.TRANSFORM: StreamKind.FILTERABLE,
    NodeKind.SINK: StreamKind.OUTPUT,
}


__all__ = ["NODE_STREAM_KINDS", "Label", "NodeKind", "Selector", "StreamKind"]
