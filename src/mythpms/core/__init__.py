"""Core utilities package.

This package contains pure utility functions with no external dependencies:
start-time parsing, library file-name helpers, subprocess invocation and
process/ownership helpers.
"""

from mythpms.core.datetime_utils import (
    compact_start_time,
    format_catalog_time,
    normalize_start_time,
    parse_start_time,
)
from mythpms.core.process_utils import chown_path, renice
from mythpms.core.string_utils import (
    is_blank,
    make_filename_safe,
    pad_two_digits,
    replace_colons,
)
from mythpms.core.subprocess_utils import run_command

__all__ = [
    # Datetime
    "compact_start_time",
    "format_catalog_time",
    "normalize_start_time",
    "parse_start_time",
    # Process
    "chown_path",
    "renice",
    # Strings
    "is_blank",
    "make_filename_safe",
    "pad_two_digits",
    "replace_colons",
    # Subprocess
    "run_command",
]
