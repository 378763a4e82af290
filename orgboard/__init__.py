"""orgboard: real-time, organization-scoped performance leaderboard engine.

Subscribes to a live feed of directory records for one organization,
normalizes point shapes, filters out ineligible participants, unlocks
achievements and publishes a deterministically ordered ranking.
"""

from .engines import EligibilityEngine, GamificationEngine, PointsEngine, RankingEngine
from .exceptions import (
    InvalidCategoryError,
    InvalidTransitionError,
    OrgBoardError,
    RulesConfigError,
    UnauthorizedGrantError,
)
from .managers import (
    GamificationManager,
    LeaderboardManager,
    ScopeManager,
    SubscriptionHandle,
)
from .rules import DEFAULT_RULES, RuleSet, load_rules

__all__ = [
    "DEFAULT_RULES",
    "EligibilityEngine",
    "GamificationEngine",
    "GamificationManager",
    "InvalidCategoryError",
    "InvalidTransitionError",
    "LeaderboardManager",
    "OrgBoardError",
    "PointsEngine",
    "RankingEngine",
    "RuleSet",
    "RulesConfigError",
    "ScopeManager",
    "SubscriptionHandle",
    "UnauthorizedGrantError",
    "load_rules",
]
