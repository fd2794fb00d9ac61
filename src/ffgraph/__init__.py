"""Declarative FFmpeg filter graphs compiled to command lines."""

from .backend import CompileResult, FFmpegResult, build_command, compile, run, try_compile
from .graph import (
    FilterableStream,
    NodeOutputs,
    OutputStream,
    Stream,
    filter,
    filter_multi_output,
    input,
    output,
)
from .models import (
    CycleDetectedError,
    GraphError,
    InvalidStreamKindError,
    MultipleConsumersError,
    SelectorAlreadyAppliedError,
    Selector,
)

__all__ = [
    "CompileResult",
    "CycleDetectedError",
    "FFmpegResult",
    "FilterableStream",
    "GraphError",
    "InvalidStreamKindError",
    "MultipleConsumersError",
    "NodeOutputs",
    "OutputStream",
    "SelectorAlreadyAppliedError",
    "Selector",
    "Stream",
    "build_command",
    "compile",
    "filter",
    "filter_multi_output",
    "input",
    "output",
    "run",
    "try_compile",
]
