"""Command-line interface entry point."""

from __future__ import annotations

import sys
from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter
from pydantic import ValidationError

from .backend import run, try_compile
from .models.options import Options
from .models.pipeline import PipelineSpec
from .tools import format_command

if TYPE_CHECKING:
    from collections.abc import Callable
else:
    from collections import abc

    Callable = abc.Callable

app = App(name="ffgraph", help="Compile declarative FFmpeg pipelines.")


def _load(opts: Options, err_func: Callable[[str], None]) -> PipelineSpec | None:
    try:
        return PipelineSpec.from_file(opts.pipeline)
    except (OSError, ValidationError) as e:
        err_func(f"Invalid pipeline document {opts.pipeline}: {e}")
        return None


@app.command(name="compile")
def compile_pipeline(opts: Options) -> int:
    """Print the FFmpeg command for a pipeline document."""
    err_func = partial(print, file=sys.stderr, flush=True)
    spec = _load(opts, err_func)
    if spec is None:
        return 1
    result = try_compile(spec.build(), cmd=opts.cmd, overwrite_output=opts.overwrite_output)
    if result.error is not None:
        err_func(str(result.error))
        return 1
    print(format_command(result.args))  # noqa: T201
    return 0


@app.command(name="run")
def run_pipeline(
    opts: Options,
    status_callback: Annotated[Callable[[str], None] | None, Parameter(show=False)] = None,  # type: ignore[call-arg]
) -> int:
    """Run the FFmpeg command for a pipeline document."""
    status_func = print if status_callback is None else status_callback
    err_func = partial(print, file=sys.stderr, flush=True) if status_callback is None else status_callback
    spec = _load(opts, err_func)
    if spec is None:
        return 1
    result = run(
        spec.build(),
        cmd=opts.cmd,
        overwrite_output=opts.overwrite_output,
        runtime=opts.runtime,
        status_callback=status_func,
    )
    if not result.success:
        err_func(result.error)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the ffgraph CLI."""
    argv = sys.argv[1:] if argv is None else argv
    return app(argv)


if __name__ == "__main__":
    raise SystemExit(main())
