"""Default constants for option models."""

from __future__ import annotations

from ffgraph.models.verbosity import Verbosity

DEFAULT_CMD = "ffmpeg"
DEFAULT_OVERWRITE_OUTPUT = True
DEFAULT_VERBOSITY = Verbosity.QUIET

__all__ = ["DEFAULT_CMD", "DEFAULT_OVERWRITE_OUTPUT", "DEFAULT_VERBOSITY"]
