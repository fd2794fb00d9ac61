"""FFmpeg process helpers."""

from .cli import (
    check_ffmpeg_version,
    format_command,
    get_ffmpeg_version,
    join_command,
    quote_arg,
    run,
    run_command,
)
from .helpers import emit_status, format_action_label, maybe_log_command

__all__ = [
    "check_ffmpeg_version",
    "emit_status",
    "format_action_label",
    "format_command",
    "get_ffmpeg_version",
    "join_command",
    "maybe_log_command",
    "quote_arg",
    "run",
    "run_command",
]
