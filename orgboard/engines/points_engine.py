"""Points Engine - Pure logic for record and point-shape normalization.

This engine provides stateless, pure Python functions for:
- Mapping legacy (bare number) and four-category point shapes to one shape
- Recomputing the derived total (a stored total is never trusted)
- Building canonical ParticipantRecords from raw data-source documents

ARCHITECTURE: This is a pure logic engine with NO I/O.
All functions are static methods that operate on passed-in data.
Normalization never raises: missing or malformed values default to 0/None.

Legacy shape: `points` stored as a bare number predates the category
breakdown. It maps to all-zero categories (and therefore total 0); the raw
value is kept as `legacy_points` for display only.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.math_utils import coerce_points, sum_points

if TYPE_CHECKING:
    from ..type_defs import ParticipantRecord, PointsBreakdown


class PointsEngine:
    """Pure logic engine for point and record normalization.

    All methods are static - no instance state.
    """

    @staticmethod
    def is_legacy_points(raw_points: Any) -> bool:
        """Return True if points are stored in the legacy bare-number shape."""
        return isinstance(raw_points, int | float) and not isinstance(
            raw_points, bool
        )

    @staticmethod
    def normalize_points(raw_points: Any) -> PointsBreakdown:
        """Map any stored points value to the canonical breakdown.

        Args:
            raw_points: Bare number (legacy), mapping (possibly partial), or junk

        Returns:
            PointsBreakdown with all four categories and a recomputed total
        """
        source: Mapping[str, Any] = (
            raw_points if isinstance(raw_points, Mapping) else {}
        )
        breakdown: dict[str, int] = {
            category: coerce_points(source.get(category))
            for category in const.POINT_CATEGORIES
        }
        breakdown[const.CATEGORY_TOTAL] = sum_points(breakdown.values())
        return breakdown  # type: ignore[return-value]

    @staticmethod
    def derive_display_name(raw: Mapping[str, Any], record_id: str) -> str:
        """Pick a display label: explicit name, then email local-part, then id."""
        name = raw.get(const.RAW_DISPLAY_NAME)
        if isinstance(name, str) and name.strip():
            return name.strip()
        email = raw.get(const.RAW_EMAIL)
        if isinstance(email, str) and email.strip():
            local_part = email.strip().split("@", 1)[0]
            if local_part:
                return local_part
        return record_id

    @staticmethod
    def normalize_achievements(raw_achievements: Any) -> list[str]:
        """Return granted achievement ids, deduplicated in stored order."""
        if not isinstance(raw_achievements, list | tuple | set | frozenset):
            return []
        seen: dict[str, None] = {}
        for item in raw_achievements:
            if isinstance(item, str) and item:
                seen.setdefault(item, None)
        return list(seen)

    @staticmethod
    def _optional_str(value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @staticmethod
    def normalize_record(raw: Mapping[str, Any]) -> ParticipantRecord:
        """Build a canonical ParticipantRecord from a raw document.

        Department and role are passed through untouched (only type-checked);
        the EligibilityEngine owns their interpretation.

        Args:
            raw: Document as delivered by the data source

        Returns:
            ParticipantRecord with normalized points and achievements
        """
        raw_id = raw.get(const.RAW_ID)
        record_id = str(raw_id) if raw_id is not None else ""
        raw_points = raw.get(const.RAW_POINTS)

        record: ParticipantRecord = {
            const.DATA_RECORD_ID: record_id,
            const.DATA_RECORD_DISPLAY_NAME: PointsEngine.derive_display_name(
                raw, record_id
            ),
            const.DATA_RECORD_EMAIL: PointsEngine._optional_str(
                raw.get(const.RAW_EMAIL)
            ),
            const.DATA_RECORD_ORGANIZATION_ID: PointsEngine._optional_str(
                raw.get(const.RAW_ORGANIZATION_ID)
            ),
            const.DATA_RECORD_DEPARTMENT: PointsEngine._optional_str(
                raw.get(const.RAW_DEPARTMENT)
            ),
            const.DATA_RECORD_ROLE: PointsEngine._optional_str(
                raw.get(const.RAW_ROLE)
            ),
            const.DATA_RECORD_POINTS: PointsEngine.normalize_points(raw_points),
            const.DATA_RECORD_ACHIEVEMENTS: PointsEngine.normalize_achievements(
                raw.get(const.RAW_ACHIEVEMENTS)
            ),
        }  # type: ignore[typeddict-item]

        if PointsEngine.is_legacy_points(raw_points):
            record[const.DATA_RECORD_LEGACY_POINTS] = coerce_points(raw_points)  # type: ignore[literal-required]

        return record

    @staticmethod
    def normalize_records(raws: Iterable[Any]) -> list[ParticipantRecord]:
        """Normalize a snapshot, skipping entries that are not mappings."""
        records: list[ParticipantRecord] = []
        for raw in raws or ():
            if not isinstance(raw, Mapping):
                const.LOGGER.debug("Skipping non-mapping snapshot entry: %r", raw)
                continue
            records.append(PointsEngine.normalize_record(raw))
        return records
