"""Declarative pipeline documents.

A pipeline document names its inputs and filters and lists its outputs::

    {
      "inputs":  {"in": {"path": "input.mp4"}},
      "filters": {"flip": {"name": "hflip", "inputs": ["in:v"]}},
      "outputs": [{"path": "output.mp4", "inputs": ["flip"]}]
    }

Stream references are ``id``, ``id.label``, ``id:selector`` or
``id.label:selector`` (or the equivalent object form).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, model_validator

from ffgraph.graph import streams as graph_streams
from ffgraph.models.types import Label, Selector

LABEL_SEPARATOR = "."
SELECTOR_SEPARATOR = ":"

# JSON booleans are rejected, not coerced to 1 or 0.
ParamValue = StrictStr | StrictInt | StrictFloat
ParamsField = dict[str, ParamValue] | list[ParamValue]


class StreamRef(BaseModel):
    """Reference to one output of an input or filter."""

    node: str = Field(min_length=1)
    label: Label = ""
    selector: Selector | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def parse_text(cls, data: object) -> object:
        """Expand the ``id.label:selector`` shorthand."""
        if not isinstance(data, str):
            return data
        target, sep, selector = data.partition(SELECTOR_SEPARATOR)
        node, _, label = target.partition(LABEL_SEPARATOR)
        parsed: dict[str, object] = {"node": node, "label": label}
        if sep:
            parsed["selector"] = selector
        return parsed


class InputSpec(BaseModel):
    """A media input."""

    path: str = Field(min_length=1)
    params: ParamsField = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class FilterSpec(BaseModel):
    """A filter applied to one or more streams."""

    name: str = Field(min_length=1)
    inputs: list[StreamRef] = Field(min_length=1)
    params: ParamsField = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class OutputSpec(BaseModel):
    """A media output fed by one or more streams."""

    path: str = Field(min_length=1)
    inputs: list[StreamRef] = Field(min_length=1)
    params: ParamsField = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class PipelineSpec(BaseModel):
    """A whole pipeline: named inputs and filters plus the outputs."""

    inputs: dict[str, InputSpec] = Field(min_length=1)
    filters: dict[str, FilterSpec] = Field(default_factory=dict)
    outputs: list[OutputSpec] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_file(cls, path: str | Path) -> PipelineSpec:
        """Load and validate a JSON pipeline document."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    @model_validator(mode="after")
    def validate_ids(self) -> PipelineSpec:
        """Ensure ids are well formed and unique across inputs and filters."""
        for node_id in (*self.inputs, *self.filters):
            if LABEL_SEPARATOR in node_id or SELECTOR_SEPARATOR in node_id or not node_id:
                raise ValueError(f"Invalid id '{node_id}': ids must be non-empty and contain no '.' or ':'")
        shared = self.inputs.keys() & self.filters.keys()
        if shared:
            raise ValueError(f"Ids used for both an input and a filter: {', '.join(sorted(shared))}")
        return self

    @model_validator(mode="after")
    def validate_refs(self) -> PipelineSpec:
        """Ensure every reference names a known input or filter."""
        refs = [r for f in self.filters.values() for r in f.inputs] + [r for o in self.outputs for r in o.inputs]
        for ref in refs:
            if ref.node in self.inputs:
                if ref.label:
                    raise ValueError(f"Input '{ref.node}' has no output labelled '{ref.label}'")
            elif ref.node not in self.filters:
                raise ValueError(f"Unknown stream reference: '{ref.node}'")
        return self

    @model_validator(mode="after")
    def validate_acyclic(self) -> PipelineSpec:
        """Reject filters that feed back into themselves."""
        done: set[str] = set()

        def visit(filter_id: str, path: tuple[str, ...]) -> None:
            if filter_id in path:
                loop = " -> ".join((*path[path.index(filter_id) :], filter_id))
                raise ValueError(f"Filter references form a cycle: {loop}")
            if filter_id in done:
                return
            for ref in self.filters[filter_id].inputs:
                if ref.node in self.filters:
                    visit(ref.node, (*path, filter_id))
            done.add(filter_id)

        for filter_id in self.filters:
            visit(filter_id, ())
        return self

    def build(self) -> list[graph_streams.OutputStream]:
        """Construct the graph and return one output stream per output."""
        sources = {node_id: graph_streams.input(spec.path, spec.params) for node_id, spec in self.inputs.items()}
        built: dict[str, graph_streams.NodeOutputs] = {}

        def resolve(ref: StreamRef) -> graph_streams.Stream:
            if ref.node in sources:
                stream: graph_streams.Stream = sources[ref.node]
            else:
                stream = build_filter(ref.node).stream(ref.label)
            return stream if ref.selector is None else stream.get(ref.selector)

        def wire(refs: list[StreamRef]) -> graph_streams.Stream | list[graph_streams.Stream]:
            streams = [resolve(r) for r in refs]
            return streams[0] if len(streams) == 1 else streams

        def build_filter(filter_id: str) -> graph_streams.NodeOutputs:
            if filter_id not in built:
                spec = self.filters[filter_id]
                built[filter_id] = graph_streams.filter_multi_output(wire(spec.inputs), spec.name, spec.params)
            return built[filter_id]

        return [graph_streams.output(wire(spec.inputs), spec.path, spec.params) for spec in self.outputs]


__all__ = ["FilterSpec", "InputSpec", "OutputSpec", "PipelineSpec", "StreamRef"]
