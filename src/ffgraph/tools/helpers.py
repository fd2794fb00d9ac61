"""Status emission helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
else:
    from collections import abc

    Callable = abc.Callable

from ffgraph.models.verbosity import Verbosity

logger = logging.getLogger(__name__)


def emit_status(message: str, *, status_callback: Callable[[str], None] | None) -> None:
    """Send ``message`` to the CLI, logger, or a custom callback.

    * ``print`` - used by the CLI for direct terminal updates.
    * ``None`` - route messages through ``logger.info``.
    * Any other ``Callable[[str], None]`` - for embedding applications or
      tests that capture status output.
    """
    if status_callback is None:
        logger.info(message)
        return
    # Progress lines from ffmpeg end in "\r" and are redrawn in place.
    if status_callback is print:
        print(  # noqa: T201
            message,
            end="" if "\r" in message and "\n" not in message else "\n",
            flush=True,
        )
        return
    status_callback(message)


def format_action_label(*, dry_run: bool) -> str:
    """Return ``Command`` for dry runs and ``Running`` otherwise."""
    return "Command" if dry_run else "Running"


def maybe_log_command(
    *,
    verbosity: Verbosity,
    dry_run: bool,
    status_callback: Callable[[str], None] | None,
    banner: str,
) -> None:
    """Emit a command banner at ``Verbosity.COMMANDS`` and above, or on dry runs."""
    if verbosity >= Verbosity.COMMANDS or dry_run:
        emit_status(banner, status_callback=status_callback)


__all__ = ["emit_status", "format_action_label", "maybe_log_command"]
