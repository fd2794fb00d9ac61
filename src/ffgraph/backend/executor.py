"""Compile and execute FFmpeg commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ffgraph.graph.dag import topo_sort
from ffgraph.graph.streams import Stream, terminal_nodes
from ffgraph.models import RuntimeContext
from ffgraph.models.options import RuntimeOptions
from ffgraph.models.options.defaults import DEFAULT_CMD
from ffgraph.models.verbosity import Verbosity
from ffgraph.tools import check_ffmpeg_version, format_command, run_command
from ffgraph.tools.helpers import emit_status, format_action_label, maybe_log_command

from .builder import try_compile

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

CONVERSION_FAILED = "Conversion failed"
COMPILE_FAILED = "Invalid pipeline graph"

logger = logging.getLogger(__name__)


@dataclass
class FFmpegResult:
    """Result of compiling and running an FFmpeg command."""

    success: bool
    error: str = ""
    args: tuple[str, ...] = ()
    output: str | None = None
    version: str | None = None


def output_paths(streams: Stream | Iterable[Stream]) -> list[Path]:
    """Return the paths written by the outputs behind ``streams``."""
    graph = topo_sort(terminal_nodes(streams))
    return [Path(node.path) for node in graph.sinks if node.path]


def _ensure_output_parent(path: Path, ctx: RuntimeContext) -> None:
    """Create the output parent directory if missing.

    Raises:
        OSError: If the parent exists but is not a directory, or creation fails.

    """
    parent = path.parent
    if parent.exists():
        if not parent.is_dir():
            raise OSError(f"{CONVERSION_FAILED}: Output directory parent is not a directory: {parent}")
        return
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:  # pragma: no cover - filesystem errors depend on env
        raise OSError(f"{CONVERSION_FAILED}: {e}") from e
    if ctx.verbosity > Verbosity.QUIET:
        emit_status(f"Created output directory: {parent}", status_callback=ctx.status_callback)


def execute_ffmpeg(
    args: tuple[str, ...],
    *,
    verbose: bool = False,
    list_cmd: bool = False,
    status_callback: Callable[[str], None] | None = None,
) -> FFmpegResult:
    """Execute a compiled command and return the result."""
    try:
        output = run_command(args, verbose=verbose, status_callback=status_callback, list_cmd=list_cmd)
    except (subprocess.CalledProcessError, OSError) as e:
        return FFmpegResult(success=False, error=f"{CONVERSION_FAILED}: {e!s}", args=args)
    return FFmpegResult(success=True, args=args, output=output)


def _run_compiled(ctx: RuntimeContext, args: tuple[str, ...], outputs: list[Path]) -> FFmpegResult:
    if ctx.dry_run:
        maybe_log_command(
            verbosity=ctx.verbosity,
            dry_run=True,
            status_callback=ctx.status_callback,
            banner=f"{format_action_label(dry_run=True)}: {format_command(args)}",
        )
        return FFmpegResult(success=True, args=args)

    try:
        for path in outputs:
            _ensure_output_parent(path, ctx)
        version = check_ffmpeg_version(ctx, args[0])
    except (OSError, RuntimeError) as e:
        return FFmpegResult(success=False, error=str(e), args=args)
    logger.debug("Using %s", version)
    if ctx.show_commands:
        emit_status(f"Using {version}", status_callback=ctx.status_callback)

    result = execute_ffmpeg(
        args,
        verbose=ctx.stream_output,
        list_cmd=ctx.show_commands,
        status_callback=ctx.status_callback,
    )
    result.version = version
    return result


def run(
    streams: Stream | Iterable[Stream],
    *,
    cmd: str = DEFAULT_CMD,
    overwrite_output: bool = True,
    runtime: RuntimeOptions | None = None,
    status_callback: Callable[[str], None] | None = None,
) -> FFmpegResult:
    """Compile the graph ending in ``streams`` and run it.

    Graph errors and process failures are reported in the result rather than
    raised. On dry run the command is only reported; otherwise the result
    carries the version line of the executable that ran it.
    """
    if not isinstance(streams, Stream):
        streams = list(streams)
    compiled = try_compile(streams, cmd=cmd, overwrite_output=overwrite_output)
    if compiled.error is not None:
        return FFmpegResult(success=False, error=f"{COMPILE_FAILED}: {compiled.error}")
    with RuntimeContext.from_options(runtime or RuntimeOptions(), status_callback) as ctx:
        return _run_compiled(ctx, compiled.args, output_paths(streams))


__all__ = ["COMPILE_FAILED", "CONVERSION_FAILED", "FFmpegResult", "execute_ffmpeg", "output_paths", "run"]
