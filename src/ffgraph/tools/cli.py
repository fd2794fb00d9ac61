"""Helpers for executing FFmpeg and formatting commands."""

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from ffgraph.models.context import RuntimeContext
from ffgraph.models.options.defaults import DEFAULT_CMD

from .helpers import emit_status

_VERSION_KEY_PREFIX = "__ffmpeg_version__"

_FILTER_COMPLEX = "-filter_complex"

logger = logging.getLogger(__name__)


def _run_streaming(
    cmd: list[str],
    *,
    creationflags: int,
    log: Callable[[str], None],
) -> str:
    """Run a command, streaming combined stdout/stderr and returning output."""
    with subprocess.Popen(  # noqa: S603
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        bufsize=1,
        creationflags=creationflags,
    ) as p:
        output_chunks: list[str] = []
        if p.stdout is None:  # pragma: no cover - defensive
            raise RuntimeError("Failed to capture subprocess stdout")
        buf = ""
        for line in iter(p.stdout.readline, ""):
            output_chunks.append(line)
            parts = line.split("\r")
            buf += parts[0]
            for part in parts[1:]:
                log(buf + "\r")
                buf = part
            if buf.endswith("\n"):
                log(buf[:-1])
                buf = ""
        if buf:
            log(buf)
        p.wait()
        output = "".join(output_chunks)
        if p.returncode:
            raise subprocess.CalledProcessError(p.returncode or 1, cmd, output)
        return output


def run(
    exe: str | Path,
    args: Sequence[str | Path],
    *,
    verbose: bool = False,
    status_callback: Callable[[str], None] | None = None,
    list_cmd: bool = False,
) -> str:
    """Run an executable and return its combined stdout/stderr.

    When ``verbose`` is ``True``, stream output lines to ``status_callback``
    (or the logger) while the process runs.

    Raises:
        subprocess.CalledProcessError: If the process exits non-zero.
        OSError: If the executable cannot be started.

    """
    cmd = [str(exe), *[str(a) for a in args]]

    def log(message: str) -> None:
        emit_status(message, status_callback=status_callback)

    if list_cmd:
        log(f"Running: {join_command(exe, args)}")

    creationflags = getattr(subprocess, "CREATE_NO_WINDOW", 0)

    if verbose:
        return _run_streaming(cmd, creationflags=creationflags, log=log)

    proc = subprocess.run(  # noqa: S603
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        creationflags=creationflags,
        check=True,
    )
    logger.debug("%s exited with %d", exe, proc.returncode)
    return proc.stdout


def run_command(
    command: Sequence[str],
    *,
    verbose: bool = False,
    status_callback: Callable[[str], None] | None = None,
    list_cmd: bool = False,
) -> str:
    """Run a full argument vector whose first element is the executable."""
    return run(command[0], command[1:], verbose=verbose, status_callback=status_callback, list_cmd=list_cmd)


def get_ffmpeg_version(exe: str = DEFAULT_CMD) -> str:
    """Return the first line of ``<exe> -version``.

    Raises:
        FileNotFoundError: If ``exe`` is not installed.
        RuntimeError: If the version query fails.

    """
    try:
        out = run(exe, ["-version"])
    except FileNotFoundError as e:  # pragma: no cover - system-dependent
        raise FileNotFoundError(f"{exe} not found") from e
    except subprocess.CalledProcessError as e:  # pragma: no cover - unlikely
        raise RuntimeError(f"{exe} failed: {e}") from e
    return out.splitlines()[0].strip()


def check_ffmpeg_version(ctx: RuntimeContext, exe: str = DEFAULT_CMD) -> str:
    """Return the ``exe`` version string, cached in ``ctx.cache``.

    Raises:
        RuntimeError: If ``exe`` is missing or fails.

    """

    def probe() -> str:
        try:
            return get_ffmpeg_version(exe)
        except FileNotFoundError as e:
            raise RuntimeError(f"{exe} not found") from e

    return ctx.cached(f"{_VERSION_KEY_PREFIX}{exe}", probe)


def quote_arg(arg: str, *, force: bool = False) -> str:
    """Quote argument if needed."""
    if os.name == "nt":
        quoted = subprocess.list2cmdline([arg])
        if force and quoted == arg:
            return f'"{arg}"'
        return quoted
    quoted = shlex.quote(arg)
    if force and quoted == arg:
        return f"'{arg}'"
    return quoted


def join_command(exe: str | Path, args: Sequence[str | Path]) -> str:
    """Format a command for display; the filter graph text is always quoted."""
    parts = [str(exe), *[str(a) for a in args]]
    return " ".join(
        quote_arg(part, force=i > 0 and parts[i - 1] == _FILTER_COMPLEX) for i, part in enumerate(parts)
    )


def format_command(command: Sequence[str]) -> str:
    """Format a full argument vector for display."""
    return join_command(command[0], command[1:])


__all__ = [
    "check_ffmpeg_version",
    "format_command",
    "get_ffmpeg_version",
    "join_command",
    "quote_arg",
    "run",
    "run_command",
]
