# File: rules.py
"""Rule-table configuration for orgboard.

Achievement definitions and the department exclusion list are data, not
code. They are validated with voluptuous schemas and can be loaded from a
YAML document:

    achievements:
      - id: attendance_master
        name: Attendance Master
        category: attendance
        threshold: 100
      - id: all_rounder
        name: All-Rounder
        category: composite
        rule: all_categories
    excluded_departments: [hr, management, admin]
    default_organization_id: acme

Omitted keys fall back to the defaults in const.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import voluptuous as vol
import yaml

from . import const
from .exceptions import RulesConfigError
from .type_defs import AchievementDefinition


def _non_blank_string(value: Any) -> str:
    """Validate a string that is not empty after stripping."""
    if not isinstance(value, str) or not value.strip():
        raise vol.Invalid("expected a non-empty string")
    return value.strip()


def _department_key(value: Any) -> str:
    """Validate and normalize an exclusion-list entry."""
    return _non_blank_string(value).casefold()


def _validate_rule_category(definition: dict[str, Any]) -> dict[str, Any]:
    """Cross-field check: threshold rules need a rankable category."""
    rule = definition[const.DATA_ACHIEVEMENT_RULE]
    category = definition[const.DATA_ACHIEVEMENT_CATEGORY]
    if (
        rule == const.ACHIEVEMENT_RULE_THRESHOLD
        and category not in const.RANKING_CATEGORIES
    ):
        raise vol.Invalid(
            f"threshold rule needs one of {list(const.RANKING_CATEGORIES)}, "
            f"got {category!r}"
        )
    return definition


ACHIEVEMENT_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(const.DATA_ACHIEVEMENT_ID): _non_blank_string,
            vol.Optional(const.DATA_ACHIEVEMENT_NAME, default=""): str,
            vol.Optional(const.DATA_ACHIEVEMENT_DESCRIPTION, default=""): str,
            vol.Required(const.DATA_ACHIEVEMENT_CATEGORY): vol.In(
                const.ACHIEVEMENT_CATEGORIES
            ),
            vol.Optional(const.DATA_ACHIEVEMENT_THRESHOLD, default=0): vol.All(
                vol.Coerce(int), vol.Range(min=0)
            ),
            vol.Optional(
                const.DATA_ACHIEVEMENT_RULE, default=const.ACHIEVEMENT_RULE_THRESHOLD
            ): vol.In(const.ACHIEVEMENT_RULES),
            vol.Optional(const.DATA_ACHIEVEMENT_ICON): str,
        }
    ),
    _validate_rule_category,
)


def _unique_achievement_ids(
    definitions: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Reject duplicate achievement ids."""
    seen: set[str] = set()
    for definition in definitions:
        achievement_id = definition[const.DATA_ACHIEVEMENT_ID]
        if achievement_id in seen:
            raise vol.Invalid(f"duplicate achievement id {achievement_id!r}")
        seen.add(achievement_id)
    return definitions


RULES_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_ACHIEVEMENTS): vol.All(
            [ACHIEVEMENT_SCHEMA], _unique_achievement_ids
        ),
        vol.Optional(const.CONF_EXCLUDED_DEPARTMENTS): [_department_key],
        vol.Optional(
            const.CONF_ALL_ROUNDER_FLOOR, default=const.DEFAULT_ALL_ROUNDER_FLOOR
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(
            const.CONF_BADGE_TOP_N, default=const.DEFAULT_BADGE_TOP_N
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(
            const.CONF_BADGE_CONSISTENT_SCORE,
            default=const.DEFAULT_BADGE_CONSISTENT_SCORE,
        ): vol.Coerce(int),
        vol.Optional(
            const.CONF_DEFAULT_ORGANIZATION_ID,
            default=const.DEFAULT_ORGANIZATION_ID,
        ): _non_blank_string,
    }
)


@dataclass(frozen=True)
class RuleSet:
    """Immutable, validated rule tables shared by engines and managers.

    Attributes:
        achievements: Achievement definitions in evaluation order
        excluded_departments: Casefolded department names that never rank
        all_rounder_floor: Per-category floor for all_categories rules with threshold 0
        badge_top_n: Rank indices below this get the top10 badge
        badge_consistent_score: Scores strictly above this get the consistent badge
        default_organization_id: Tenant used when scope resolution fails
    """

    achievements: tuple[AchievementDefinition, ...] = ()
    excluded_departments: frozenset[str] = field(
        default_factory=lambda: const.DEFAULT_EXCLUDED_DEPARTMENTS
    )
    all_rounder_floor: int = const.DEFAULT_ALL_ROUNDER_FLOOR
    badge_top_n: int = const.DEFAULT_BADGE_TOP_N
    badge_consistent_score: int = const.DEFAULT_BADGE_CONSISTENT_SCORE
    default_organization_id: str = const.DEFAULT_ORGANIZATION_ID

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> RuleSet:
        """Validate a raw configuration mapping and build a RuleSet.

        Raises:
            RulesConfigError: If the configuration does not match RULES_SCHEMA
        """
        try:
            validated: dict[str, Any] = RULES_SCHEMA(dict(config or {}))
        except vol.Invalid as err:
            raise RulesConfigError(f"Invalid rule configuration: {err}") from err

        raw_achievements = validated.get(const.CONF_ACHIEVEMENTS)
        if raw_achievements is None:
            raw_achievements = [
                ACHIEVEMENT_SCHEMA(dict(item)) for item in const.DEFAULT_ACHIEVEMENTS
            ]
        excluded = validated.get(const.CONF_EXCLUDED_DEPARTMENTS)

        return cls(
            achievements=tuple(
                cast("AchievementDefinition", item) for item in raw_achievements
            ),
            excluded_departments=(
                frozenset(excluded)
                if excluded is not None
                else const.DEFAULT_EXCLUDED_DEPARTMENTS
            ),
            all_rounder_floor=validated[const.CONF_ALL_ROUNDER_FLOOR],
            badge_top_n=validated[const.CONF_BADGE_TOP_N],
            badge_consistent_score=validated[const.CONF_BADGE_CONSISTENT_SCORE],
            default_organization_id=validated[const.CONF_DEFAULT_ORGANIZATION_ID],
        )

    def get_achievement(self, achievement_id: str) -> AchievementDefinition | None:
        """Return the definition for achievement_id, if configured."""
        for definition in self.achievements:
            if definition[const.DATA_ACHIEVEMENT_ID] == achievement_id:
                return definition
        return None


def load_rules(path: str | Path) -> RuleSet:
    """Load and validate rule tables from a YAML file.

    An empty file yields the default rules.

    Raises:
        RulesConfigError: If the file cannot be read, parsed or validated
    """
    try:
        with Path(path).open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as err:
        raise RulesConfigError(f"Cannot load rules from {path}: {err}") from err

    if raw is not None and not isinstance(raw, Mapping):
        raise RulesConfigError(f"Rules file {path} must contain a mapping")

    rules = RuleSet.from_config(raw)
    const.LOGGER.debug(
        "Loaded %d achievement definitions and %d excluded departments from %s",
        len(rules.achievements),
        len(rules.excluded_departments),
        path,
    )
    return rules


DEFAULT_RULES = RuleSet.from_config(None)
