"""Verbosity levels for command and process logging."""

from enum import IntEnum


class Verbosity(IntEnum):
    """How much of a run to report.

    ``COMMANDS`` shows compiled FFmpeg commands; ``OUTPUT`` also streams the
    process output.
    """

    QUIET = 0
    COMMANDS = 1
    OUTPUT = 2


__all__ = ["Verbosity"]
