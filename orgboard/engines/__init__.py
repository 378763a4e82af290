"""Engine modules for orgboard.

Contains stateless computation engines:
- points_engine: Point-shape and record normalization
- eligibility_engine: Leaderboard participation rules
- ranking_engine: Stable category ordering and rank labels
- gamification_engine: Achievement unlocks and badge classification
"""

from .eligibility_engine import EligibilityEngine
from .gamification_engine import GamificationEngine
from .points_engine import PointsEngine
from .ranking_engine import RankingEngine

__all__ = [
    "EligibilityEngine",
    "GamificationEngine",
    "PointsEngine",
    "RankingEngine",
]
