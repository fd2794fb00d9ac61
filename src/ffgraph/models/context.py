"""Per-run state for the process layer.

A ``RuntimeContext`` is opened for each ``run`` and carries the resolved
runtime flags, where status messages go, and the probe cache that survives
between runs (keyed by executable, so switching ``--cmd`` re-probes).
"""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Self

from diskcache import Cache

from ffgraph.models.verbosity import Verbosity

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from ffgraph.models.options import RuntimeOptions


def cache_dir() -> Path:
    """Return the directory backing the tool probe cache."""
    return Path(os.getenv("FFGRAPH_CACHE", tempfile.gettempdir())) / "ffgraph-cache"


def _default_cache() -> Cache:
    return Cache(str(cache_dir()))


@dataclass(slots=True)
class RuntimeContext:
    """Verbosity, dry-run flag, status sink and probe cache for one run."""

    verbosity: Verbosity = Verbosity.QUIET
    dry_run: bool = False
    status_callback: Callable[[str], None] | None = None
    cache: Cache = field(default_factory=_default_cache)

    @classmethod
    def from_options(
        cls,
        runtime: RuntimeOptions,
        status_callback: Callable[[str], None] | None = None,
    ) -> RuntimeContext:
        return cls(verbosity=runtime.verbosity, dry_run=runtime.dry_run, status_callback=status_callback)

    @property
    def show_commands(self) -> bool:
        """Whether command lines and tool versions are reported."""
        return self.verbosity >= Verbosity.COMMANDS

    @property
    def stream_output(self) -> bool:
        """Whether FFmpeg output is streamed while it runs."""
        return self.verbosity >= Verbosity.OUTPUT

    def cached(self, key: str, compute: Callable[[], str]) -> str:
        """Return ``cache[key]``, computing and storing it on a miss."""
        value = self.cache.get(key)
        if isinstance(value, str):
            return value
        value = compute()
        self.cache[key] = value
        return value

    def close(self) -> None:
        self.cache.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:  # pragma: no cover - cleanup
        with suppress(Exception):
            self.cache.close()


__all__ = ["RuntimeContext", "cache_dir"]
