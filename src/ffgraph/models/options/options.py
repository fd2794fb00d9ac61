"""Top-level option model for the command line."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .defaults import DEFAULT_CMD, DEFAULT_OVERWRITE_OUTPUT
from .groups import COMPILE_GROUP, PIPELINE_GROUP
from .runtime import RuntimeOptions


@Parameter(name="*")
class Options(BaseModel):
    """Options for compiling or running a pipeline document."""

    pipeline: Annotated[
        Path,
        Parameter(group=PIPELINE_GROUP),
    ] = Field(description="Path to a JSON pipeline document.")
    cmd: Annotated[
        str,
        Parameter(group=COMPILE_GROUP),
    ] = Field(default=DEFAULT_CMD, min_length=1, description="FFmpeg executable to invoke.")
    overwrite_output: Annotated[
        bool,
        Parameter(group=COMPILE_GROUP),
    ] = Field(default=DEFAULT_OVERWRITE_OUTPUT, description="Overwrite existing output files (-y).")
    runtime: RuntimeOptions = Field(default_factory=RuntimeOptions)

    model_config = ConfigDict(extra="forbid")

    @field_validator("pipeline")
    @classmethod
    def validate_pipeline(cls, v: Path) -> Path:
        """Ensure the pipeline document exists."""
        path = Path(v).expanduser().absolute()
        if not path.is_file():
            raise ValueError(f"Pipeline path is not a file: {path}")
        return path


__all__ = ["Options"]
