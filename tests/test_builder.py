"""Tests for command compilation."""

import pytest

import ffgraph
from ffgraph.backend.builder import build_command, try_compile
from ffgraph.backend.builder.command_args import FILTER_COMPLEX, HIDE_BANNER, MAP, OVERWRITE_OUTPUT
from ffgraph.backend.builder.filters import filter_expr
from ffgraph.backend.builder.stream_args import map_args
from ffgraph.graph.dag import Node
from ffgraph.models import CycleDetectedError, MultipleConsumersError, NodeKind


def test_single_filter(hflip_command: list[str]) -> None:
    """One input, one filter with parameters, one output."""
    out = ffgraph.input("input.mp4").filter("hflip", {"x": 10, "y": 20}).output("output.mp4")
    assert out.compile() == hflip_command
    assert " ".join(out.compile()) == (
        "ffmpeg -hide_banner -i input.mp4 -filter_complex [0]hflip=x=10:y=20[s0] -map [s0] output.mp4 -y"
    )


def test_two_inputs_overlay() -> None:
    """Sources are referenced by position; a bare filter name has no '='."""
    video = ffgraph.input("hi.mp4")
    image = ffgraph.input("hi.png")
    out = ffgraph.filter([video, image], "overlay").output("output.mp4")
    assert " ".join(out.compile()) == (
        "ffmpeg -hide_banner -i hi.mp4 -i hi.png -filter_complex [0][1]overlay[s0] -map [s0] output.mp4 -y"
    )


def test_concat_without_filters() -> None:
    """No filter graph, no implicit map and no overwrite flag."""
    out = ffgraph.input("list.txt", {"f": "concat", "safe": "0", "c": "copy"}).output("output.mp4")
    assert " ".join(out.compile("./ffmpeg", overwrite_output=False)) == (
        "./ffmpeg -hide_banner -f concat -safe 0 -c copy -i list.txt output.mp4"
    )


def test_selector_on_filter_input() -> None:
    """A selected source renders with its selector inside brackets."""
    out = ffgraph.input("input.mp4").video().filter("hflip").output("output.mp4")
    args = out.compile()
    assert args[args.index(FILTER_COMPLEX[0]) + 1] == "[0:v]hflip[s0]"


def test_command_frame() -> None:
    """The program name and banner flag lead; overwrite trails."""
    args = build_command(ffgraph.input("in.mp4").output("out.mp4"), cmd="/opt/ffmpeg")
    assert args[:2] == ("/opt/ffmpeg", *HIDE_BANNER)
    assert args[-1:] == OVERWRITE_OUTPUT


def test_split_and_stack() -> None:
    """Multi-output filters get one name per label in allocation order."""
    split = ffgraph.input("in.mp4").filter_multi_output("split")
    left = split[0].filter("hflip")
    right = split[1].filter("vflip")
    out = ffgraph.filter([left, right], "hstack").output("out.mp4")
    assert out.compile() == [
        "ffmpeg",
        "-hide_banner",
        "-i",
        "in.mp4",
        "-filter_complex",
        "[0]split[s0][s1];[s0]hflip[s2];[s1]vflip[s3];[s2][s3]hstack[s4]",
        "-map",
        "[s4]",
        "out.mp4",
        "-y",
    ]


def test_shared_source_rendered_once() -> None:
    """A source used by two filters is declared once."""
    src = ffgraph.input("in.mp4")
    out = ffgraph.filter([src.filter("hflip"), src.filter("vflip")], "hstack").output("out.mp4")
    args = out.compile()
    assert args.count("in.mp4") == 1
    assert args[args.index("-filter_complex") + 1] == "[0]hflip[s0];[0]vflip[s1];[s0][s1]hstack[s2]"


def test_duplicate_sources_deduplicated() -> None:
    """Structurally identical sources collapse to one input."""
    out = ffgraph.filter([ffgraph.input("a.mp4"), ffgraph.input("a.mp4")], "overlay").output("o.mp4")
    args = out.compile()
    assert args.count("-i") == 1
    assert "[0][0]overlay[s0]" in args


def test_multiple_outputs() -> None:
    """Several outputs compile into one command with explicit maps."""
    src = ffgraph.input("in.mp4")
    first = src.output("a.mp4")
    second = src.video().output("b.mp4", {"c:v": "copy"})
    assert ffgraph.compile([first, second]) == [
        "ffmpeg",
        "-hide_banner",
        "-i",
        "in.mp4",
        "a.mp4",
        "-map",
        "0:v",
        "-c:v",
        "copy",
        "b.mp4",
        "-y",
    ]


def test_output_with_several_streams_maps_all() -> None:
    """Every edge is mapped once an output has more than one."""
    src = ffgraph.input("in.mp4")
    out = ffgraph.output([src.video(), src.audio()], "out.mkv")
    assert out.compile(overwrite_output=False)[-5:] == ["-map", "0:v", "-map", "0:a", "out.mkv"]
    two = ffgraph.output([src, ffgraph.input("audio.wav")], "mix.mkv")
    assert two.compile(overwrite_output=False)[-5:] == ["-map", "0", "-map", "1", "mix.mkv"]


def test_map_args_use_shared_flag() -> None:
    """Map arguments pair the shared flag with the reference."""
    assert map_args("0:v") == (*MAP, "0:v")
    assert map_args("[s3]") == ("-map", "[s3]")


def test_output_from_second_source_is_mapped() -> None:
    """Only the lone reference to source 0 is implicit."""
    a = ffgraph.input("a.mp4")
    b = ffgraph.input("b.mp4")
    args = ffgraph.compile([a.output("x.mp4"), b.output("y.mp4")], overwrite_output=False)
    assert args == ["ffmpeg", "-hide_banner", "-i", "a.mp4", "-i", "b.mp4", "x.mp4", "-map", "1", "y.mp4"]


def test_literal_argument_params() -> None:
    """Pre-formatted argument lists pass through verbatim."""
    out = (
        ffgraph.input("in.mp4", ["-ss", "5"])
        .filter("scale", [1280, 720])
        .output("out.mp4", ["-c:v", "libx264"])
    )
    assert out.compile(overwrite_output=False) == [
        "ffmpeg",
        "-hide_banner",
        "-ss",
        "5",
        "-i",
        "in.mp4",
        "-filter_complex",
        "[0]scale=1280:720[s0]",
        "-map",
        "[s0]",
        "-c:v",
        "libx264",
        "out.mp4",
    ]


def test_filter_expr_forms() -> None:
    """Filter text is the bare name, key=value pairs, or positional values."""
    assert filter_expr(Node.create(NodeKind.TRANSFORM, "null")) == "null"
    assert filter_expr(Node.create(NodeKind.TRANSFORM, "fps", {"fps": 30})) == "fps=fps=30"
    assert filter_expr(Node.create(NodeKind.TRANSFORM, "pad", {"w": "iw", "h": "ih"})) == "pad=w=iw:h=ih"


def test_compile_is_deterministic() -> None:
    """Compiling the same or a rebuilt graph gives identical output."""

    def build() -> ffgraph.OutputStream:
        src = ffgraph.input("in.mp4")
        split = src.filter_multi_output("split")
        return ffgraph.filter([split[0], split[1].filter("negate")], "hstack").output("out.mp4")

    out = build()
    assert out.compile() == out.compile()
    assert out.compile() == build().compile()


def test_multiple_consumers_rejected() -> None:
    """A filter output feeding two consumers fails before any output."""
    flipped = ffgraph.input("in.mp4").filter("hflip")
    out = ffgraph.filter([flipped, flipped], "hstack").output("out.mp4")
    with pytest.raises(MultipleConsumersError) as excinfo:
        out.compile()
    assert excinfo.value.node == flipped.node
    assert excinfo.value.label == ""
    assert len(excinfo.value.consumers) == 2


def test_multiple_consumers_across_outputs() -> None:
    """Two outputs reading one filter output are rejected too."""
    flipped = ffgraph.input("in.mp4").filter("hflip")
    with pytest.raises(MultipleConsumersError):
        ffgraph.compile([flipped.output("a.mp4"), flipped.output("b.mp4")])


def test_try_compile_reports_errors() -> None:
    """The result form carries the error and no arguments."""
    flipped = ffgraph.input("in.mp4").filter("hflip")
    result = try_compile(ffgraph.filter([flipped, flipped], "hstack").output("out.mp4"))
    assert not result.success
    assert isinstance(result.error, MultipleConsumersError)
    assert result.args == ()
    ok = try_compile(ffgraph.input("in.mp4").output("out.mp4"))
    assert ok.success
    assert ok.args[-1] == "-y"


def test_cycle_aborts_compile() -> None:
    """A cyclic graph never produces arguments."""
    first = ffgraph.input("in.mp4").filter("null")
    second = first.filter("hflip")
    out = second.output("out.mp4")
    node = first.node
    back = type(node.incoming_edges[0])(second.node, "", None, node, "loop")
    object.__setattr__(node, "incoming_edges", (*node.incoming_edges, back))
    with pytest.raises(CycleDetectedError):
        out.compile()
    assert isinstance(try_compile(out).error, CycleDetectedError)
