"""Options package exports."""

from __future__ import annotations

from ffgraph.models.verbosity import Verbosity

from .defaults import DEFAULT_CMD, DEFAULT_OVERWRITE_OUTPUT, DEFAULT_VERBOSITY
from .options import Options
from .runtime import RuntimeOptions

__all__ = [
    "DEFAULT_CMD",
    "DEFAULT_OVERWRITE_OUTPUT",
    "DEFAULT_VERBOSITY",
    "Options",
    "RuntimeOptions",
    "Verbosity",
]
