"""Manager modules for orgboard.

Managers orchestrate workflows and coordinate between engines.
They are stateful and own the side effects (subscriptions, grant writes).
"""

from .base_manager import BaseManager
from .gamification_manager import GamificationManager
from .leaderboard_manager import LeaderboardManager, SubscriptionHandle
from .scope_manager import ScopeManager

__all__ = [
    "BaseManager",
    "GamificationManager",
    "LeaderboardManager",
    "ScopeManager",
    "SubscriptionHandle",
]
