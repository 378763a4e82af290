"""Tests for utils.math_utils point coercion and ordinals."""

from __future__ import annotations

import pytest

from orgboard.utils.math_utils import coerce_points, format_ordinal, sum_points


class TestCoercePoints:
    """Tests for coerce_points()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, 42),
            (-3, -3),
            (12.9, 12),
            (-12.9, -12),
            ("30", 30),
            (" 7.5 ", 7),
            ("abc", 0),
            (None, 0),
            (True, 0),
            (float("inf"), 0),
            ("nan", 0),
            ({"a": 1}, 0),
        ],
    )
    def test_values(self, value: object, expected: int) -> None:
        """Every input maps to an int without raising."""
        assert coerce_points(value) == expected

    def test_custom_default(self) -> None:
        """The default is used for invalid input."""
        assert coerce_points(None, default=-1) == -1


def test_sum_points() -> None:
    """sum_points coerces each element."""
    assert sum_points([1, "2", None, 3.9]) == 6


def test_format_ordinal() -> None:
    """Ordinal formatting covers teens."""
    assert [format_ordinal(n) for n in (1, 11, 21, 111, 1000)] == [
        "1st",
        "11th",
        "21st",
        "111th",
        "1000th",
    ]
