"""Common FFmpeg command arguments."""

HIDE_BANNER: tuple[str, ...] = ("-hide_banner",)  #: Suppress the build banner.
INPUT_FLAG: tuple[str, ...] = ("-i",)  #: Introduce an input file path.
FILTER_COMPLEX: tuple[str, ...] = ("-filter_complex",)  #: Introduce the filter graph text.
MAP: tuple[str, ...] = ("-map",)  #: Select a stream for the next output.
OVERWRITE_OUTPUT: tuple[str, ...] = ("-y",)  #: Overwrite existing files.

FILTER_SEPARATOR = ";"  #: Separates filter statements in the graph text.
PARAM_SEPARATOR = ":"  #: Separates filter parameters and selector suffixes.
