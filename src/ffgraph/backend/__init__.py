"""Backend utilities for compiling and executing FFmpeg commands."""

from .builder import CompileResult, build_command, compile, try_compile
from .executor import FFmpegResult, run

__all__ = [
    "CompileResult",
    "FFmpegResult",
    "build_command",
    "compile",
    "run",
    "try_compile",
]
