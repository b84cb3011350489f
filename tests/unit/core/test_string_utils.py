"""Tests for core/string_utils.py."""

import pytest

from mythpms.core.string_utils import (
    is_blank,
    make_filename_safe,
    pad_two_digits,
    replace_colons,
)


class TestMakeFilenameSafe:
    """Tests for make_filename_safe function."""

    def test_colon_replaced(self) -> None:
        assert make_filename_safe("Foo: Bar (2001)") == "Foo_ Bar (2001)"

    def test_allowed_characters_kept(self) -> None:
        name = "Show-Name_1.0 (Part 2)"
        assert make_filename_safe(name) == name

    @pytest.mark.parametrize("char", ["/", "\\", "?", "*", "'", '"', "&", "!", "é"])
    def test_unsafe_characters_replaced(self, char: str) -> None:
        assert make_filename_safe(f"a{char}b") == "a_b"

    def test_length_preserved(self) -> None:
        name = "Who's Line? It's Yours!"
        assert len(make_filename_safe(name)) == len(name)


class TestIsBlank:
    """Tests for is_blank function."""

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n"])
    def test_blank(self, value) -> None:
        assert is_blank(value)

    def test_not_blank(self) -> None:
        assert not is_blank(" Pilot ")


class TestPadTwoDigits:
    """Tests for pad_two_digits function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "00"), (7, "07"), ("7", "07"), (12, "12"), ("", "00"), (None, "00"), (123, "23")],
    )
    def test_padding(self, value, expected: str) -> None:
        assert pad_two_digits(value) == expected


def test_replace_colons() -> None:
    assert replace_colons("2016-03-06 20:30:00") == "2016-03-06 20-30-00"
