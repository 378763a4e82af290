"""Tests for GamificationManager - achievement grant persistence.

Test Categories:
- Privilege enforcement (admin only)
- Partial-failure tolerance (false result and raised errors)
- Single-flight per record
- Listener notification
"""

from __future__ import annotations

import asyncio

import pytest

from orgboard import const
from orgboard.engines.points_engine import PointsEngine
from orgboard.exceptions import UnauthorizedGrantError
from orgboard.managers import GamificationManager
from tests.helpers import FakeAchievementStore, make_raw_record


class TestComputePending:
    """Tests for compute_pending()."""

    def test_delegates_to_engine(self, gamification_manager: GamificationManager) -> None:
        """Only records with new achievements appear."""
        records = PointsEngine.normalize_records(
            [
                make_raw_record("a", attendance=100),
                make_raw_record("b", attendance=5),
            ]
        )
        assert gamification_manager.compute_pending(records) == {
            "a": [const.ACHIEVEMENT_ID_ATTENDANCE_MASTER]
        }


class TestApplyGrants:
    """Tests for async_apply_grants()."""

    @pytest.mark.asyncio
    async def test_requires_admin(
        self,
        gamification_manager: GamificationManager,
        achievement_store: FakeAchievementStore,
    ) -> None:
        """Non-admin actors cannot write grants."""
        with pytest.raises(UnauthorizedGrantError):
            await gamification_manager.async_apply_grants(
                {"a": ["all_rounder"]}, const.ROLE_EMPLOYEE
            )
        with pytest.raises(UnauthorizedGrantError):
            gamification_manager.schedule_apply({"a": ["all_rounder"]}, None)
        assert achievement_store.calls == []

    @pytest.mark.asyncio
    async def test_grants_each_record(
        self,
        gamification_manager: GamificationManager,
        achievement_store: FakeAchievementStore,
    ) -> None:
        """Each pending record is written once with its ids."""
        result = await gamification_manager.async_apply_grants(
            {"a": ["x", "y"], "b": ["z"], "c": []}, const.ROLE_ADMIN
        )
        assert result == {
            "granted": {"a": ["x", "y"], "b": ["z"]},
            "failed": [],
            "skipped": [],
        }
        assert achievement_store.calls == [("a", ["x", "y"]), ("b", ["z"])]
        assert gamification_manager.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_failures_do_not_block_other_records(
        self,
        gamification_manager: GamificationManager,
        achievement_store: FakeAchievementStore,
    ) -> None:
        """A failed or raising write is reported and the batch continues."""
        achievement_store.fail_ids = {"a"}
        achievement_store.raise_ids = {"b"}
        result = await gamification_manager.async_apply_grants(
            {"a": ["x"], "b": ["y"], "c": ["z"]}, "admin"
        )
        assert result["failed"] == ["a", "b"]
        assert result["granted"] == {"c": ["z"]}
        assert achievement_store.granted == {"c": ["z"]}
        assert gamification_manager.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_listeners_receive_results(
        self, gamification_manager: GamificationManager
    ) -> None:
        """Listeners get the batch result; removed listeners do not."""
        received: list[dict] = []
        remove = gamification_manager.async_add_listener(received.append)
        await gamification_manager.async_apply_grants({"a": ["x"]}, "admin")
        remove()
        remove()
        await gamification_manager.async_apply_grants({"b": ["y"]}, "admin")
        assert len(received) == 1
        assert received[0]["granted"] == {"a": ["x"]}


class TestSingleFlight:
    """Tests for per-record single-flight scheduling."""

    @pytest.mark.asyncio
    async def test_overlapping_passes_skip_in_flight_records(
        self,
        gamification_manager: GamificationManager,
        achievement_store: FakeAchievementStore,
    ) -> None:
        """A record whose write is pending is skipped by the next pass."""
        achievement_store.gate = asyncio.Event()

        first = gamification_manager.schedule_apply({"a": ["x"], "b": ["y"]}, "admin")
        assert first is not None
        assert gamification_manager.in_flight == frozenset({"a", "b"})

        second = gamification_manager.schedule_apply({"a": ["x"]}, "admin")
        assert second is None

        third = gamification_manager.schedule_apply(
            {"b": ["y"], "c": ["z"]}, "admin"
        )
        assert third is not None

        achievement_store.gate.set()
        await gamification_manager.async_block_till_done()

        first_result = first.result()
        third_result = third.result()
        assert first_result["granted"] == {"a": ["x"], "b": ["y"]}
        assert third_result["granted"] == {"c": ["z"]}
        assert third_result["skipped"] == ["b"]
        assert [call[0] for call in achievement_store.calls].count("b") == 1
        assert gamification_manager.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_schedule_with_nothing_pending(
        self, gamification_manager: GamificationManager
    ) -> None:
        """Empty work schedules no task."""
        assert gamification_manager.schedule_apply({}, "admin") is None
        assert gamification_manager.schedule_apply({"a": []}, "admin") is None
        assert gamification_manager.pending_task_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_pass_releases_reservations(
        self,
        gamification_manager: GamificationManager,
        achievement_store: FakeAchievementStore,
    ) -> None:
        """Cancelling a pass frees its records for the next one."""
        achievement_store.gate = asyncio.Event()
        task = gamification_manager.schedule_apply({"a": ["x"]}, "admin")
        assert task is not None
        await asyncio.sleep(0)
        task.cancel()
        await gamification_manager.async_block_till_done()
        assert gamification_manager.in_flight == frozenset()
