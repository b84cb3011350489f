"""String helpers for building library file names.

Plex matches files by name, so library names keep only characters that are
safe on every filesystem Plex reads from, plus the parentheses and spaces
its naming convention requires.
"""

from __future__ import annotations

import re

# Hyphen, letters, digits, dot, underscore, space and parentheses survive.
_UNSAFE_CHARS = re.compile(r"[^-A-Za-z0-9._ ()]")


def make_filename_safe(name: str) -> str:
    """Replace every character that is unsafe in a file name with "_".

    Args:
        name: Raw name, e.g. a program title.

    Returns:
        Name of the same length with unsafe characters substituted.

    Example:
        >>> make_filename_safe("Foo: Bar (2001)")
        'Foo_ Bar (2001)'
    """
    return _UNSAFE_CHARS.sub("_", name)


def is_blank(value: str | None) -> bool:
    """Return True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def pad_two_digits(value: object) -> str:
    """Pad a season or episode number to exactly two characters.

    MythTV stores season and episode without leading zeros; Plex expects two
    digits. Values whose length is not already two are left-padded with
    zeros and truncated to their last two characters, so ``""`` becomes
    ``"00"`` and ``"7"`` becomes ``"07"``.
    """
    text = "" if value is None else str(value)
    if len(text) != 2:
        text = ("00" + text)[-2:]
    return text


def replace_colons(value: str, replacement: str = "-") -> str:
    """Replace colons, which some filesystems reject, in a time string."""
    return value.replace(":", replacement)
