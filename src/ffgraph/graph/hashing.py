"""Structural hashing of graph nodes.

A node's hash is derived from its own content plus one term per incoming
edge, each of which folds in the upstream node's hash. Structurally identical
subgraphs therefore hash identically no matter which Python objects hold them,
which is what lets the compiler deduplicate shared nodes.

Hashes are 64 bits wide. Collisions are possible in principle and are not
guarded against; the hash is an identity key for well-formed graphs, not a
defence against crafted input.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ffgraph.models.types import NodeKind, Selector

    from .dag import Params, UpstreamRef

HASH_BITS = 64
_HASH_BYTES = HASH_BITS // 8
_HASH_MASK = (1 << HASH_BITS) - 1


def digest(payload: Any) -> int:
    """Return a 64-bit digest of ``payload``'s canonical JSON encoding."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    raw = hashlib.blake2b(canonical.encode("utf-8"), digest_size=_HASH_BYTES).digest()
    return int.from_bytes(raw, "big")


def encode_params(params: Params) -> dict[str, Any]:
    """Return a tagged encoding of ``params``.

    Mappings are encoded as objects so key order is irrelevant once sorted;
    literal argument sequences keep their order. The tag keeps an empty
    mapping and an empty sequence apart.
    """
    if isinstance(params, Mapping):
        return {"kwargs": dict(params)}
    if isinstance(params, Sequence):
        return {"args": list(params)}
    raise TypeError(f"Unsupported parameter container: {type(params).__name__}")


def _selector_value(selector: Selector | None) -> str | None:
    return None if selector is None else selector.value


def edge_hash(downstream_label: str, upstream: UpstreamRef) -> int:
    """Return the hash contribution of one incoming edge."""
    return digest(
        {
            "downstream_label": downstream_label,
            "upstream_hash": upstream.node.hash,
            "upstream_label": upstream.label,
            "upstream_selector": _selector_value(upstream.selector),
        }
    )


def node_hash(
    kind: NodeKind,
    name: str,
    params: Params,
    path: str | None,
    upstreams: Sequence[tuple[str, UpstreamRef]],
) -> int:
    """Return the structural hash for a node with the given content."""
    inner = digest({"kind": kind.value, "name": name, "params": encode_params(params), "path": path})
    total = inner + sum(edge_hash(label, ref) for label, ref in upstreams)
    return total & _HASH_MASK


def label_hash(node_hash_value: int, label: str) -> int:
    """Return the hash of output ``label`` on a node hashing to ``node_hash_value``."""
    return (node_hash_value + digest({"label": label})) & _HASH_MASK


__all__ = ["HASH_BITS", "digest", "edge_hash", "encode_params", "label_hash", "node_hash"]
