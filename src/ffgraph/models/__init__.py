"""Expose models and type definitions.

The option and pipeline-document models live in ``ffgraph.models.options``
and ``ffgraph.models.pipeline``; the latter builds graphs and is therefore not
imported here.
"""

from .context import RuntimeContext
from .errors import (
    CycleDetectedError,
    GraphError,
    InvalidStreamKindError,
    MultipleConsumersError,
    SelectorAlreadyAppliedError,
)
from .types import Label, NodeKind, Selector, StreamKind
from .verbosity import Verbosity

__all__ = [
    "CycleDetectedError",
    "GraphError",
    "InvalidStreamKindError",
    "Label",
    "MultipleConsumersError",
    "NodeKind",
    "RuntimeContext",
    "SelectorAlreadyAppliedError",
    "Selector",
    "StreamKind",
    "Verbosity",
]
