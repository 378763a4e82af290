"""Shared fixtures for orgboard tests."""

from __future__ import annotations

import pytest

from orgboard.managers import GamificationManager, LeaderboardManager, ScopeManager
from orgboard.rules import DEFAULT_RULES, RuleSet
from tests.helpers import FakeAchievementStore, FakeDataSource, FakeDirectory


@pytest.fixture
def rules() -> RuleSet:
    """Default rule tables."""
    return DEFAULT_RULES


@pytest.fixture
def data_source() -> FakeDataSource:
    """Explicitly driven push/pull data source."""
    return FakeDataSource()


@pytest.fixture
def achievement_store() -> FakeAchievementStore:
    """Recording achievement store."""
    return FakeAchievementStore()


@pytest.fixture
def directory() -> FakeDirectory:
    """Empty directory lookup."""
    return FakeDirectory()


@pytest.fixture
def gamification_manager(
    achievement_store: FakeAchievementStore, rules: RuleSet
) -> GamificationManager:
    """GamificationManager writing to the fake store."""
    return GamificationManager(achievement_store, rules)


@pytest.fixture
def leaderboard_manager(
    data_source: FakeDataSource,
    gamification_manager: GamificationManager,
    rules: RuleSet,
) -> LeaderboardManager:
    """LeaderboardManager wired to the fakes."""
    return LeaderboardManager(data_source, gamification_manager, rules)


@pytest.fixture
def scope_manager(directory: FakeDirectory, rules: RuleSet) -> ScopeManager:
    """ScopeManager backed by the fake directory."""
    return ScopeManager(directory, rules)
