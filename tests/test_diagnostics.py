"""Tests for orgboard diagnostics.

Diagnostics summarize manager state for troubleshooting and must never
expose record contents.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names

import pytest

from orgboard import const
from orgboard.diagnostics import get_leaderboard_diagnostics
from orgboard.managers import GamificationManager, LeaderboardManager
from tests.helpers import FakeDataSource, make_raw_record, make_scope

pytestmark = pytest.mark.asyncio


async def test_diagnostics_before_start(
    leaderboard_manager: LeaderboardManager,
) -> None:
    """An idle manager reports no scope and nothing published."""
    result = get_leaderboard_diagnostics(leaderboard_manager)

    assert result["state"] == const.SUBSCRIPTION_STATE_IDLE
    assert result["organization_id"] is None
    assert result["subscription_active"] is False
    assert result["published"] is False
    assert result["row_count"] == 0
    assert result["achievement_definitions"] == len(const.DEFAULT_ACHIEVEMENTS)
    assert "grants_in_flight" not in result


async def test_diagnostics_live(
    leaderboard_manager: LeaderboardManager,
    gamification_manager: GamificationManager,
    data_source: FakeDataSource,
) -> None:
    """A live manager reports scope, view and counts."""
    leaderboard_manager.start(make_scope("org-7", is_default=True))
    data_source.push(
        [
            make_raw_record("a", attendance=3),
            make_raw_record("b", department="HR", attendance=9),
        ]
    )
    leaderboard_manager.set_category(const.CATEGORY_ATTENDANCE)

    result = get_leaderboard_diagnostics(leaderboard_manager, gamification_manager)

    assert result["state"] == const.SUBSCRIPTION_STATE_LIVE
    assert result["organization_id"] == "org-7"
    assert result["default_scope"] is True
    assert result["category"] == const.CATEGORY_ATTENDANCE
    assert result["subscription_active"] is True
    assert result["published"] is True
    assert result["stale"] is False
    assert result["row_count"] == 1
    assert result["eligible_count"] == 1
    assert result["ineligible_count"] == 1
    assert result["grants_in_flight"] == 0


async def test_diagnostics_exclude_record_contents(
    leaderboard_manager: LeaderboardManager, data_source: FakeDataSource
) -> None:
    """Names and emails never appear in the export."""
    leaderboard_manager.start(make_scope())
    data_source.push(
        [make_raw_record("a", display_name="Alice Secret", email="alice@corp.test")]
    )

    rendered = repr(get_leaderboard_diagnostics(leaderboard_manager))

    assert "Alice Secret" not in rendered
    assert "alice@corp.test" not in rendered
