"""Unit tests for RankingEngine - stable category ordering and rank labels."""

from __future__ import annotations

import pytest

from orgboard.engines.points_engine import PointsEngine
from orgboard.engines.ranking_engine import RankingEngine
from orgboard.exceptions import InvalidCategoryError
from tests.helpers import make_raw_record


def _record(record_id: str, **points: int):
    return PointsEngine.normalize_record(make_raw_record(record_id, **points))


def _ids(entries) -> list[str]:
    return [entry["record"]["id"] for entry in entries]


class TestRank:
    """Tests for rank()."""

    def test_orders_by_total_descending(self) -> None:
        """Default category is the derived total."""
        records = [
            _record("low", attendance=10),
            _record("high", attendance=50, innovation=50),
            _record("mid", efficiency=40),
        ]
        assert _ids(RankingEngine.rank(records)) == ["high", "mid", "low"]

    def test_orders_by_selected_category(self) -> None:
        """A point category sorts by that category only."""
        records = [
            _record("a", attendance=100),
            _record("b", innovation=30),
            _record("c", innovation=60),
        ]
        ranked = RankingEngine.rank(records, "innovation")
        assert _ids(ranked) == ["c", "b", "a"]
        assert [entry["score"] for entry in ranked] == [60, 30, 0]

    def test_ties_keep_input_order(self) -> None:
        """Equal scores never swap relative order."""
        records = [
            _record("first", collaboration=20),
            _record("top", collaboration=90),
            _record("second", collaboration=20),
            _record("third", collaboration=20),
        ]
        ranked = RankingEngine.rank(records, "collaboration")
        assert _ids(ranked) == ["top", "first", "second", "third"]

        reversed_input = [records[3], records[2], records[0]]
        assert _ids(RankingEngine.rank(reversed_input, "collaboration")) == [
            "third",
            "second",
            "first",
        ]

    def test_rank_numbers_and_labels(self) -> None:
        """Ranks are 1-based with ordinal labels."""
        records = [_record(f"r{i}", attendance=100 - i) for i in range(12)]
        ranked = RankingEngine.rank(records, "attendance")
        assert [entry["rank"] for entry in ranked] == list(range(1, 13))
        assert [entry["rank_label"] for entry in ranked[:4]] == [
            "1st",
            "2nd",
            "3rd",
            "4th",
        ]
        assert ranked[10]["rank_label"] == "11th"
        assert ranked[11]["rank_label"] == "12th"

    def test_empty_input(self) -> None:
        """Ranking nothing yields nothing."""
        assert RankingEngine.rank([], "total") == []

    def test_unknown_category(self) -> None:
        """Unknown categories raise InvalidCategoryError (a ValueError)."""
        with pytest.raises(InvalidCategoryError):
            RankingEngine.rank([], "charisma")
        with pytest.raises(ValueError):
            RankingEngine.validate_category("composite")


class TestOrdinals:
    """Tests for ordinal suffix formatting."""

    @pytest.mark.parametrize(
        ("rank", "label"),
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (101, "101st"),
            (111, "111th"),
            (112, "112th"),
        ],
    )
    def test_format_rank(self, rank: int, label: str) -> None:
        """English ordinals with the 11-13 exception."""
        assert RankingEngine.format_rank(rank) == label
        assert RankingEngine.ordinal_suffix(rank) == label[len(str(rank)) :]


class TestFilterByDepartment:
    """Tests for the department view filter."""

    def test_none_and_all_keep_everything(self) -> None:
        """None and 'all' mean no filter."""
        records = [_record("a"), _record("b")]
        assert RankingEngine.filter_by_department(records, None) == records
        assert RankingEngine.filter_by_department(records, "all") == records

    def test_exact_department_match(self) -> None:
        """Only records with exactly that department remain."""
        records = [
            PointsEngine.normalize_record(make_raw_record("a", department="Sales")),
            PointsEngine.normalize_record(make_raw_record("b", department="sales")),
            PointsEngine.normalize_record(make_raw_record("c", department="Sales")),
        ]
        kept = RankingEngine.filter_by_department(records, "Sales")
        assert [record["id"] for record in kept] == ["a", "c"]
