"""Gamification Manager - Persists achievement grants computed by the engine.

The GamificationEngine decides what a record newly qualifies for; this
manager writes those grants through the AchievementStore collaborator.

CRITICAL PRINCIPLE: Achievements are NEVER revoked. Grants are additive
merges; a failed write is simply recomputed and retried on the next pass
because compute is idempotent.

Privilege: applying grants writes on behalf of every record in the tenant,
so only an admin actor may run it.

Single-flight: at most one grant write per record is in flight. A record
whose previous write has not finished is skipped for the current pass.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from .. import const
from ..engines.eligibility_engine import is_admin_role
from ..engines.gamification_engine import GamificationEngine
from ..exceptions import UnauthorizedGrantError
from .base_manager import BaseManager

if TYPE_CHECKING:
    import asyncio

    from ..interfaces import AchievementStore
    from ..rules import RuleSet
    from ..type_defs import GrantBatchResult, ParticipantRecord


class GamificationManager(BaseManager):
    """Applies achievement grants with partial-failure tolerance.

    Listeners registered with async_add_listener receive each
    GrantBatchResult after an apply pass completes.
    """

    def __init__(
        self, store: AchievementStore, rules: RuleSet | None = None
    ) -> None:
        """Initialize the manager.

        Args:
            store: Achievement persistence collaborator
            rules: Rule tables (defaults to DEFAULT_RULES)
        """
        super().__init__(rules)
        self._store = store
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> frozenset[str]:
        """Record ids whose grant write has not finished."""
        return frozenset(self._in_flight)

    def compute_pending(
        self, records: Iterable[ParticipantRecord]
    ) -> dict[str, list[str]]:
        """Return record_id -> newly qualified ids for records with something new."""
        return GamificationEngine.compute_batch(records, self.rules)

    async def async_apply_grants(
        self,
        pending: Mapping[str, list[str]],
        actor_role: str | None,
    ) -> GrantBatchResult:
        """Persist newly qualified achievements for each record.

        Args:
            pending: record_id -> achievement ids to merge
            actor_role: Role of the acting user (must be admin)

        Returns:
            GrantBatchResult describing granted, failed and skipped records

        Raises:
            UnauthorizedGrantError: If actor_role is not admin
        """
        if not is_admin_role(actor_role):
            raise UnauthorizedGrantError(actor_role)

        reserved, skipped = self._reserve(pending)
        return await self._async_write_reserved(reserved, skipped)

    def schedule_apply(
        self,
        pending: Mapping[str, list[str]],
        actor_role: str | None,
    ) -> asyncio.Task[GrantBatchResult] | None:
        """Run the apply pass in the background.

        Records are reserved before this returns, so an overlapping pass
        scheduled right after sees them as in flight and skips them.

        Returns:
            The scheduled task, or None when nothing is left to write or no
            event loop is running

        Raises:
            UnauthorizedGrantError: If actor_role is not admin
        """
        if not is_admin_role(actor_role):
            raise UnauthorizedGrantError(actor_role)

        reserved, skipped = self._reserve(pending)
        if not reserved:
            if skipped:
                const.LOGGER.debug(
                    "All pending grants already in flight: %s", skipped
                )
            return None
        task = self._create_task(
            self._async_write_reserved(reserved, skipped),
            name="orgboard_apply_grants",
        )
        if task is None:
            # Not scheduled; the next pass recomputes these grants
            self._in_flight.difference_update(reserved)
        return task

    def _reserve(
        self, pending: Mapping[str, list[str]]
    ) -> tuple[dict[str, list[str]], list[str]]:
        """Claim records not already in flight; return (reserved, skipped)."""
        reserved: dict[str, list[str]] = {}
        skipped: list[str] = []
        for record_id, achievement_ids in pending.items():
            if not achievement_ids:
                continue
            if record_id in self._in_flight:
                skipped.append(record_id)
                continue
            reserved[record_id] = list(achievement_ids)
        self._in_flight.update(reserved)
        return reserved, skipped

    async def _async_write_reserved(
        self, reserved: dict[str, list[str]], skipped: list[str]
    ) -> GrantBatchResult:
        """Write each reserved record, releasing it once its write settles."""
        result: GrantBatchResult = {"granted": {}, "failed": [], "skipped": skipped}

        try:
            for record_id, achievement_ids in reserved.items():
                try:
                    succeeded = await self._store.async_grant_achievements(
                        record_id, achievement_ids
                    )
                except Exception:  # pylint: disable=broad-exception-caught
                    const.LOGGER.exception(
                        "Error persisting achievements %s for record %s",
                        achievement_ids,
                        record_id,
                    )
                    succeeded = False
                finally:
                    self._in_flight.discard(record_id)

                if succeeded:
                    const.LOGGER.info(
                        "Record %s unlocked achievements %s",
                        record_id,
                        achievement_ids,
                    )
                    result["granted"][record_id] = achievement_ids
                else:
                    const.LOGGER.error(
                        "Failed to persist achievements %s for record %s; "
                        "will retry on next recomputation",
                        achievement_ids,
                        record_id,
                    )
                    result["failed"].append(record_id)
        finally:
            # Cancellation mid-pass must not leave records reserved forever
            self._in_flight.difference_update(reserved)

        if result["granted"] or result["failed"]:
            self.emit(result)
        return result
