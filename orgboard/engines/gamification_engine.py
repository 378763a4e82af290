"""Gamification Engine - Pure logic for achievement and badge evaluation.

This engine provides stateless, pure Python functions for:
- Achievement unlock evaluation (per-category thresholds, composite rules)
- Batch computation of newly qualified achievements across a snapshot
- Transient badge classification for ranked rows

ARCHITECTURE: This is a pure logic engine with NO I/O.
All functions are static methods that operate on passed-in data.
The GamificationManager is responsible for persisting grants.

Achievement Rule Kinds:
- threshold: points in `category` (a point category or total) >= threshold.
  A threshold of 0 marks a rule-based definition and never qualifies here.
- all_categories: every point category >= threshold (or the all-rounder
  floor when threshold is 0).

Idempotence: an id already in the record's achievements is never returned,
so computing twice on the same state yields nothing the second time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..rules import RuleSet
    from ..type_defs import AchievementDefinition, ParticipantRecord, RankedEntry


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Handler function signature: (record, definition, rules) -> qualifies
RuleHandler = Callable[
    ["ParticipantRecord", "AchievementDefinition", "RuleSet"], bool
]


# =============================================================================
# GAMIFICATION ENGINE
# =============================================================================


class GamificationEngine:
    """Pure logic engine for achievement and badge evaluation.

    All methods are static or class-level - no instance state.

    Evaluation Flow:
        1. Manager hands in a normalized record and the active RuleSet
        2. Engine evaluates each definition through the rule handler registry
        3. Engine returns newly qualified ids (never already-held ones)
        4. Manager persists the grants
    """

    # Maps achievement rule kind to handler function
    _RULE_HANDLERS: dict[str, RuleHandler] = {}

    @classmethod
    def _register_handlers(cls) -> None:
        """Populate _RULE_HANDLERS once."""
        if cls._RULE_HANDLERS:
            return

        cls._RULE_HANDLERS = {
            const.ACHIEVEMENT_RULE_THRESHOLD: cls._evaluate_threshold,
            const.ACHIEVEMENT_RULE_ALL_CATEGORIES: cls._evaluate_all_categories,
        }

    # =========================================================================
    # RULE HANDLERS
    # =========================================================================

    @staticmethod
    def _evaluate_threshold(
        record: ParticipantRecord,
        definition: AchievementDefinition,
        rules: RuleSet,
    ) -> bool:
        threshold = definition.get(const.DATA_ACHIEVEMENT_THRESHOLD, 0)
        if threshold <= 0:
            return False
        category = definition[const.DATA_ACHIEVEMENT_CATEGORY]
        points = record[const.DATA_RECORD_POINTS]
        return points.get(category, const.DEFAULT_ZERO) >= threshold  # type: ignore[operator]

    @staticmethod
    def _evaluate_all_categories(
        record: ParticipantRecord,
        definition: AchievementDefinition,
        rules: RuleSet,
    ) -> bool:
        floor = definition.get(const.DATA_ACHIEVEMENT_THRESHOLD, 0) or (
            rules.all_rounder_floor
        )
        points = record[const.DATA_RECORD_POINTS]
        return all(
            points.get(category, const.DEFAULT_ZERO) >= floor  # type: ignore[operator]
            for category in const.POINT_CATEGORIES
        )

    # =========================================================================
    # ACHIEVEMENT EVALUATION
    # =========================================================================

    @classmethod
    def qualifies(
        cls,
        record: ParticipantRecord,
        definition: AchievementDefinition,
        rules: RuleSet,
    ) -> bool:
        """Check one definition against a record, ignoring already-held state."""
        cls._register_handlers()
        rule = definition.get(
            const.DATA_ACHIEVEMENT_RULE, const.ACHIEVEMENT_RULE_THRESHOLD
        )
        handler = cls._RULE_HANDLERS.get(rule)
        if handler is None:
            const.LOGGER.warning(
                "Unknown achievement rule '%s' for achievement '%s'",
                rule,
                definition.get(const.DATA_ACHIEVEMENT_ID),
            )
            return False
        return handler(record, definition, rules)

    @classmethod
    def compute_new_achievements(
        cls, record: ParticipantRecord, rules: RuleSet
    ) -> list[str]:
        """Return achievement ids the record newly qualifies for.

        Pure function - no side effects.

        Args:
            record: Normalized ParticipantRecord
            rules: RuleSet holding the achievement definitions

        Returns:
            Ids in definition-table order, excluding ids already held
        """
        held = set(record.get(const.DATA_RECORD_ACHIEVEMENTS) or ())
        return [
            definition[const.DATA_ACHIEVEMENT_ID]
            for definition in rules.achievements
            if definition[const.DATA_ACHIEVEMENT_ID] not in held
            and cls.qualifies(record, definition, rules)
        ]

    @classmethod
    def compute_batch(
        cls, records: Iterable[ParticipantRecord], rules: RuleSet
    ) -> dict[str, list[str]]:
        """Compute new achievements for every record.

        Returns:
            record_id -> new ids, only for records with something new
        """
        pending: dict[str, list[str]] = {}
        for record in records:
            record_id = record.get(const.DATA_RECORD_ID)
            if not record_id:
                const.LOGGER.debug(
                    "Skipping achievement evaluation for record without id"
                )
                continue
            new_ids = cls.compute_new_achievements(record, rules)
            if new_ids:
                pending[record_id] = new_ids
        return pending

    # =========================================================================
    # BADGE CLASSIFICATION
    # =========================================================================

    @staticmethod
    def classify_badge(score: int, index: int, rules: RuleSet) -> str | None:
        """Classify a ranked row's transient badge.

        Rank context decides first: any index below badge_top_n (negative
        indices included) is top10 whatever the score. Otherwise a score
        strictly above badge_consistent_score is consistent.

        Args:
            score: Row score in the active category
            index: Zero-based position in the active ordering
            rules: RuleSet with badge limits

        Returns:
            const.BADGE_TOP10, const.BADGE_CONSISTENT, or None
        """
        if index < rules.badge_top_n:
            return const.BADGE_TOP10
        if score > rules.badge_consistent_score:
            return const.BADGE_CONSISTENT
        return None

    @classmethod
    def classify_entry(
        cls, entry: RankedEntry, index: int, rules: RuleSet
    ) -> str | None:
        """Classify a RankedEntry using its score in the active category."""
        return cls.classify_badge(entry["score"], index, rules)
