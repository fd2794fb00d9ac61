"""Tests for structural node hashing."""

from collections.abc import Callable

import pytest

import ffgraph
from ffgraph.graph.dag import Node
from ffgraph.graph.hashing import HASH_BITS, digest, encode_params
from ffgraph.models.types import NodeKind


def test_identical_subgraphs_hash_equal() -> None:
    """Independently built graphs with the same structure share hashes."""
    a = ffgraph.input("in.mp4").video().filter("scale", {"w": 640, "h": 360}).output("out.mp4")
    b = ffgraph.input("in.mp4").video().filter("scale", {"w": "640", "h": "360"}).output("out.mp4")
    assert a.node is not b.node
    assert a.node.hash == b.node.hash
    assert a.node == b.node
    assert len({a.node, b.node}) == 1


def test_param_order_does_not_change_hash() -> None:
    """Keyed parameters hash the same in any insertion order."""
    a = ffgraph.input("list.txt", {"f": "concat", "safe": "0"})
    b = ffgraph.input("list.txt", {"safe": "0", "f": "concat"})
    assert a.node.hash == b.node.hash


@pytest.mark.parametrize(
    "changed",
    [
        lambda: ffgraph.input("in.mp4").filter("hflip", {"x": "11"}),
        lambda: ffgraph.input("in.mp4").filter("vflip", {"x": "10"}),
        lambda: ffgraph.input("other.mp4").filter("hflip", {"x": "10"}),
        lambda: ffgraph.input("in.mp4").video().filter("hflip", {"x": "10"}),
        lambda: ffgraph.input("in.mp4", {"ss": "1"}).filter("hflip", {"x": "10"}),
    ],
)
def test_any_change_changes_hash(changed: Callable[[], ffgraph.Stream]) -> None:
    """Parameter, name, path, selector and upstream changes alter the hash."""
    base = ffgraph.input("in.mp4").filter("hflip", {"x": "10"})
    assert changed().node.hash != base.node.hash


def test_input_order_changes_hash() -> None:
    """Swapping which stream feeds which label changes the hash."""
    a = ffgraph.input("a.mp4")
    b = ffgraph.input("b.png")
    assert ffgraph.filter([a, b], "overlay").node.hash != ffgraph.filter([b, a], "overlay").node.hash


def test_mapping_and_sequence_params_are_distinct() -> None:
    """An empty mapping and an empty argument list do not collide."""
    keyed = Node.create(NodeKind.SOURCE, "input", {}, path="in.mp4")
    literal = Node.create(NodeKind.SOURCE, "input", [], path="in.mp4")
    assert encode_params(keyed.params) != encode_params(literal.params)
    assert keyed.hash != literal.hash


def test_kind_is_part_of_hash() -> None:
    """Nodes differing only in kind hash differently."""
    source = Node.create(NodeKind.SOURCE, "x", path="p")
    sink = Node.create(NodeKind.SINK, "x", path="p")
    assert source.hash != sink.hash


def test_digest_is_canonical_and_bounded() -> None:
    """Digests ignore key order and fit in the hash width."""
    assert digest({"a": 1, "b": [1, 2]}) == digest({"b": [1, 2], "a": 1})
    assert digest(["a", "b"]) != digest(["b", "a"])
    assert 0 <= digest("x") < 2**HASH_BITS


def test_stream_hash_includes_label() -> None:
    """Different outputs of one node are different streams."""
    split = ffgraph.filter_multi_output(ffgraph.input("in.mp4"), "split")
    assert split[0] != split[1]
    assert split[0] == split.stream("0")
