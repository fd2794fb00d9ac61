"""Per-compile table of internal stream names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ffgraph.graph.dag import Node

STREAM_PREFIX = "s"  #: Prefix of allocated filter output names.


@dataclass(slots=True)
class StreamNameTable:
    """Names of sources (by position) and filter outputs (by allocation order).

    Scoped to one compile; never shared between compiles.
    """

    sources: dict[int, str] = field(default_factory=dict)
    outputs: dict[tuple[int, str], str] = field(default_factory=dict)
    _count: int = 0

    def add_source(self, node: Node, index: int) -> None:
        self.sources[node.hash] = str(index)

    def allocate(self, node: Node, label: str) -> str:
        """Assign the next ``sN`` name to output ``label`` of ``node``."""
        key = (node.hash, label)
        name = self.outputs.get(key)
        if name is None:
            name = f"{STREAM_PREFIX}{self._count}"
            self._count += 1
            self.outputs[key] = name
        return name

    def name_of(self, node: Node, label: str) -> str:
        """Return the name of output ``label`` of ``node``.

        Raises:
            KeyError: If no name was assigned.

        """
        if node.hash in self.sources:
            return self.sources[node.hash]
        try:
            return self.outputs[(node.hash, label)]
        except KeyError:
            raise KeyError(f"No stream name allocated for output '{label}' of '{node.name}'") from None
