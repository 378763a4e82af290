"""Ranking Engine - Pure logic for ordering eligible records.

Sort key is the selected category's points, descending. Ties keep their
relative input order: Python's sort is stable, and ranking relies on that
as a contract (equal scores never swap).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const
from ..exceptions import InvalidCategoryError
from ..utils.math_utils import format_ordinal, ordinal_suffix

if TYPE_CHECKING:
    from ..type_defs import ParticipantRecord, RankedEntry


class RankingEngine:
    """Pure logic engine for leaderboard ordering.

    All methods are static - no instance state.
    """

    @staticmethod
    def validate_category(category: str) -> str:
        """Return category if rankable, otherwise raise InvalidCategoryError."""
        if category not in const.RANKING_CATEGORIES:
            raise InvalidCategoryError(category)
        return category

    @staticmethod
    def score_for(record: ParticipantRecord, category: str) -> int:
        """Return the record's points in category (the derived total for 'total')."""
        points = record[const.DATA_RECORD_POINTS]
        return points.get(category, const.DEFAULT_ZERO)  # type: ignore[return-value]

    @staticmethod
    def rank(
        records: Iterable[ParticipantRecord],
        category: str = const.DEFAULT_CATEGORY,
    ) -> list[RankedEntry]:
        """Order records by category points, highest first.

        Args:
            records: Normalized, eligible records (input order breaks ties)
            category: One of const.RANKING_CATEGORIES

        Returns:
            RankedEntry list with 1-based rank and ordinal label

        Raises:
            InvalidCategoryError: If category is unknown
        """
        RankingEngine.validate_category(category)
        ordered = sorted(
            records,
            key=lambda record: RankingEngine.score_for(record, category),
            reverse=True,
        )
        return [
            {
                "record": record,
                "rank": index + 1,
                "rank_label": format_ordinal(index + 1),
                "score": RankingEngine.score_for(record, category),
            }
            for index, record in enumerate(ordered)
        ]

    @staticmethod
    def filter_by_department(
        records: Iterable[ParticipantRecord], department: str | None
    ) -> list[ParticipantRecord]:
        """Restrict records to one department for a department-scoped view.

        None or const.DEPARTMENT_FILTER_ALL keeps every record. Matching is
        exact string equality on the stored department.
        """
        if department is None or department == const.DEPARTMENT_FILTER_ALL:
            return list(records)
        return [
            record
            for record in records
            if record.get(const.DATA_RECORD_DEPARTMENT) == department
        ]

    # Re-exported for callers that format ranks without a ranking pass
    ordinal_suffix = staticmethod(ordinal_suffix)
    format_rank = staticmethod(format_ordinal)
