"""Build FFmpeg arguments from a pipeline graph."""

from .command_builder import DEFAULT_CMD, CompileResult, build_command, compile, try_compile

__all__ = ["DEFAULT_CMD", "CompileResult", "build_command", "compile", "try_compile"]
