"""Type definitions for orgboard data structures.

TypedDict is used for structures whose keys are fixed at design time
(canonical records, published rows, rule definitions). Raw records delivered
by a data source are heterogeneous and stay `dict[str, Any]` until the
PointsEngine normalizes them.

IMPORTANT: This file must NOT import from engines or managers to avoid
circular dependencies. Only import from typing.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime defaulting of missing or
malformed values happens in PointsEngine.
"""

from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RecordId = str  # Opaque directory identifier
OrganizationId = str
AchievementId = str
CategoryKey = str  # One of const.RANKING_CATEGORIES
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
RawRecord = dict[str, Any]


# =============================================================================
# Participant Records
# =============================================================================


class PointsBreakdown(TypedDict):
    """Canonical four-category points with derived total.

    `total` always equals the sum of the four categories after normalization.
    """

    attendance: int
    collaboration: int
    efficiency: int
    innovation: int
    total: int


class ParticipantRecord(TypedDict):
    """Normalized directory entry as consumed by every engine."""

    id: RecordId
    display_name: str
    email: str | None
    organization_id: OrganizationId | None
    department: str | None
    role: str | None
    points: PointsBreakdown
    achievements: list[AchievementId]  # Granted ids, additive only
    legacy_points: NotRequired[int]  # Only set when stored as a bare number


class EligibilityResult(TypedDict):
    """Eligibility verdict with a machine reason code and readable message."""

    eligible: bool
    reason: str
    message: str


# =============================================================================
# Rule Tables
# =============================================================================


class AchievementDefinition(TypedDict):
    """Static achievement rule.

    A threshold of 0 marks a rule-based (not threshold-based) definition.
    """

    id: AchievementId
    name: str
    description: str
    category: str
    threshold: int
    rule: str
    icon: NotRequired[str]


# =============================================================================
# Scope
# =============================================================================


class ActorContext(TypedDict, total=False):
    """Authenticated actor as supplied by the authentication collaborator."""

    id: str
    role: str
    organizationId: str | None


class OrganizationScope(TypedDict):
    """Resolved tenant key for the current session."""

    organization_id: OrganizationId
    actor_id: str | None
    actor_role: str | None
    is_default: bool  # True when the default tenant fallback was used


# =============================================================================
# Published Output
# =============================================================================


class RankedEntry(TypedDict):
    """One ranked record before badge classification."""

    record: ParticipantRecord
    rank: int  # 1-based
    rank_label: str  # "1st", "2nd", "11th", ...
    score: int


class LeaderboardRow(RankedEntry):
    """Ranked record with its transient badge."""

    badge: str | None


class LeaderboardSnapshot(TypedDict):
    """Result published to rendering and export collaborators."""

    organization_id: OrganizationId
    category: CategoryKey
    department: str | None
    rows: list[LeaderboardRow]
    eligible_count: int
    ineligible_count: int
    stale: bool  # True when the last refresh failed and rows are last-known
    updated_at: ISODatetime


# =============================================================================
# Achievement Grants
# =============================================================================


class GrantBatchResult(TypedDict):
    """Outcome of one achievement apply pass.

    granted: record_id -> ids persisted this pass
    failed: record ids whose write failed (retried on the next snapshot)
    skipped: record ids with a grant still in flight
    """

    granted: dict[RecordId, list[AchievementId]]
    failed: list[RecordId]
    skipped: list[RecordId]
