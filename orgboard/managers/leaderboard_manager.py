"""Leaderboard Manager - Live, organization-scoped leaderboard synchronization.

Owns one data-source subscription and turns every push notification into a
full recomputation pass:

    normalize -> eligibility filter -> [admin: compute + apply achievements]
    -> department view filter -> rank -> badges -> publish

Lifecycle (see VALID_TRANSITIONS):

    idle -> subscribing -> live -> (error -> live | idle)
    any -> torn_down (terminal)

Every pass runs synchronously inside the notification callback; the only
asynchronous work is the fallback fetch after a delivery error, manual
refreshes, and achievement writes (delegated to GamificationManager).

Callbacks handed to the data source are bound to a SubscriptionHandle, not
to the manager. Releasing the handle drops its manager reference, so a late
callback from the transport reaches nothing and cannot mutate state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.eligibility_engine import EligibilityEngine, is_admin_role
from ..engines.gamification_engine import GamificationEngine
from ..engines.points_engine import PointsEngine
from ..engines.ranking_engine import RankingEngine
from ..exceptions import InvalidTransitionError
from ..utils.dt_utils import dt_now_iso
from .base_manager import BaseManager

if TYPE_CHECKING:
    import asyncio
    from types import TracebackType

    from ..interfaces import DataSource, Unsubscribe
    from ..rules import RuleSet
    from ..type_defs import (
        LeaderboardRow,
        LeaderboardSnapshot,
        OrganizationScope,
        ParticipantRecord,
        RawRecord,
    )
    from .gamification_manager import GamificationManager


class SubscriptionHandle:
    """Owned subscription resource returned by LeaderboardManager.start().

    Pass it back to LeaderboardManager.stop(), or use it as a context
    manager. Releasing is idempotent; the transport's unsubscribe callable
    is invoked at most once.
    """

    def __init__(self, manager: LeaderboardManager, scope: OrganizationScope) -> None:
        """Initialize the handle for manager and scope."""
        self.scope = scope
        self._manager: LeaderboardManager | None = manager
        self._unsubscribe: Unsubscribe | None = None

    @property
    def organization_id(self) -> str:
        """Tenant this subscription is scoped to."""
        return self.scope["organization_id"]

    @property
    def active(self) -> bool:
        """True until the handle is released."""
        return self._manager is not None

    def _attach(self, unsubscribe: Unsubscribe) -> None:
        if self._manager is None:
            # Released while the transport was still subscribing
            unsubscribe()
            return
        self._unsubscribe = unsubscribe

    def on_snapshot(self, records: list[RawRecord]) -> None:
        """Transport callback for a full snapshot."""
        manager = self._manager
        if manager is None:
            const.LOGGER.debug(
                "Ignoring snapshot for released subscription (%s)",
                self.organization_id,
            )
            return
        manager._handle_snapshot(self, records)  # pylint: disable=protected-access

    def on_error(self, err: Exception) -> None:
        """Transport callback for a delivery error."""
        manager = self._manager
        if manager is None:
            const.LOGGER.debug(
                "Ignoring error for released subscription (%s): %s",
                self.organization_id,
                err,
            )
            return
        manager._handle_error(self, err)  # pylint: disable=protected-access

    def release(self) -> bool:
        """Close the transport feed and drop the manager reference.

        Returns:
            True if this call released the handle, False if already released
        """
        if self._manager is None:
            return False
        self._manager = None
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            try:
                unsubscribe()
            except Exception:
                const.LOGGER.exception(
                    "Error closing subscription for organization %s",
                    self.organization_id,
                )
        const.LOGGER.debug("Released subscription for %s", self.organization_id)
        return True

    def __enter__(self) -> SubscriptionHandle:
        """Return self; the subscription is already open."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Stop the owning manager's subscription."""
        manager = self._manager
        if manager is not None:
            manager.stop(self)
        else:
            self.release()


class LeaderboardManager(BaseManager):
    """Subscription lifecycle and derived-state engine for one view.

    At most one subscription is open at a time; start() releases any
    previous one first. Listeners registered with async_add_listener
    receive each published LeaderboardSnapshot.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        const.SUBSCRIPTION_STATE_IDLE: [
            const.SUBSCRIPTION_STATE_SUBSCRIBING,
            const.SUBSCRIPTION_STATE_LIVE,  # Push arrives after a failed fallback
            const.SUBSCRIPTION_STATE_ERROR,
            const.SUBSCRIPTION_STATE_TORN_DOWN,
        ],
        const.SUBSCRIPTION_STATE_SUBSCRIBING: [
            const.SUBSCRIPTION_STATE_LIVE,
            const.SUBSCRIPTION_STATE_ERROR,
            const.SUBSCRIPTION_STATE_IDLE,  # Replaced by a new start()
            const.SUBSCRIPTION_STATE_TORN_DOWN,
        ],
        const.SUBSCRIPTION_STATE_LIVE: [
            const.SUBSCRIPTION_STATE_ERROR,
            const.SUBSCRIPTION_STATE_IDLE,
            const.SUBSCRIPTION_STATE_TORN_DOWN,
        ],
        const.SUBSCRIPTION_STATE_ERROR: [
            const.SUBSCRIPTION_STATE_LIVE,
            const.SUBSCRIPTION_STATE_IDLE,
            const.SUBSCRIPTION_STATE_TORN_DOWN,
        ],
        const.SUBSCRIPTION_STATE_TORN_DOWN: [],
    }

    def __init__(
        self,
        data_source: DataSource,
        gamification: GamificationManager | None = None,
        rules: RuleSet | None = None,
        *,
        category: str = const.DEFAULT_CATEGORY,
        department: str | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            data_source: Push/pull collaborator for directory records
            gamification: Applies achievement grants; None disables grants
            rules: Rule tables (defaults to DEFAULT_RULES)
            category: Initial ranking category
            department: Initial department view filter (None for all)
        """
        super().__init__(rules)
        self._data_source = data_source
        self._gamification = gamification
        self._category = RankingEngine.validate_category(category)
        self._department = department
        self._state = const.SUBSCRIPTION_STATE_IDLE
        self._handle: SubscriptionHandle | None = None
        self._fallback_task: asyncio.Task[None] | None = None
        self._eligible: list[ParticipantRecord] = []
        self._ineligible_count = 0
        self._snapshot: LeaderboardSnapshot | None = None
        # Bumped by every recompute; fetches started earlier are superseded
        self._generation = 0

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def state(self) -> str:
        """Current lifecycle state (const.SUBSCRIPTION_STATE_*)."""
        return self._state

    @property
    def handle(self) -> SubscriptionHandle | None:
        """The open subscription, if any."""
        return self._handle

    @property
    def scope(self) -> OrganizationScope | None:
        """Scope of the open subscription, if any."""
        return self._handle.scope if self._handle else None

    @property
    def category(self) -> str:
        """Active ranking category."""
        return self._category

    @property
    def department(self) -> str | None:
        """Active department view filter."""
        return self._department

    @property
    def snapshot(self) -> LeaderboardSnapshot | None:
        """Last published leaderboard, or None before the first pass."""
        return self._snapshot

    @property
    def rows(self) -> list[LeaderboardRow]:
        """Rows of the last published leaderboard."""
        return self._snapshot["rows"] if self._snapshot else []

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _transition(self, target: str) -> None:
        if target == self._state:
            return
        if target not in self.VALID_TRANSITIONS.get(self._state, []):
            raise InvalidTransitionError(self._state, target)
        const.LOGGER.debug("Leaderboard subscription %s -> %s", self._state, target)
        self._state = target

    def start(self, scope: OrganizationScope) -> SubscriptionHandle:
        """Open the live feed for scope.

        Any open subscription is released first (its callbacks go inert).

        Returns:
            The handle to pass to stop()

        Raises:
            InvalidTransitionError: If the manager has been torn down
        """
        if self._state == const.SUBSCRIPTION_STATE_TORN_DOWN:
            raise InvalidTransitionError(
                self._state, const.SUBSCRIPTION_STATE_SUBSCRIBING
            )

        if self._handle is not None:
            const.LOGGER.info(
                "Replacing leaderboard subscription for %s with %s",
                self._handle.organization_id,
                scope["organization_id"],
            )
            self._release_current()
            self._transition(const.SUBSCRIPTION_STATE_IDLE)

        handle = SubscriptionHandle(self, scope)
        self._handle = handle
        self._transition(const.SUBSCRIPTION_STATE_SUBSCRIBING)
        const.LOGGER.info(
            "Subscribing to leaderboard for organization %s", handle.organization_id
        )

        try:
            unsubscribe = self._data_source.subscribe(
                handle.organization_id, handle.on_snapshot, handle.on_error
            )
        except Exception as err:  # pylint: disable=broad-exception-caught
            # Transport refused the feed; recover through the fallback fetch
            self._handle_error(handle, err)
            return handle

        handle._attach(unsubscribe)  # pylint: disable=protected-access
        return handle

    def stop(self, handle: SubscriptionHandle) -> None:
        """Tear down the subscription owned by handle.

        Stopping the current handle is terminal: the feed is closed,
        pending fallback work is cancelled, listeners and published state are
        dropped, and the manager enters torn_down. Stopping a stale handle
        only releases that handle.
        """
        if handle is not self._handle:
            handle.release()
            return

        self._release_current()
        self._cancel_tasks()
        self._clear_listeners()
        self._eligible = []
        self._ineligible_count = 0
        self._snapshot = None
        self._transition(const.SUBSCRIPTION_STATE_TORN_DOWN)
        const.LOGGER.info("Leaderboard manager torn down")

    def _release_current(self) -> None:
        handle, self._handle = self._handle, None
        if self._fallback_task is not None:
            self._fallback_task.cancel()
            self._fallback_task = None
        if handle is not None:
            handle.release()

    # =========================================================================
    # NOTIFICATION HANDLING
    # =========================================================================

    def _handle_snapshot(
        self, handle: SubscriptionHandle, raw_records: list[RawRecord]
    ) -> None:
        if handle is not self._handle:
            return
        const.LOGGER.debug(
            "Snapshot for %s with %d record(s)",
            handle.organization_id,
            len(raw_records or []),
        )
        if self._fallback_task is not None and not self._fallback_task.done():
            # A live push supersedes the pending fallback fetch
            self._fallback_task.cancel()
        self._fallback_task = None
        self._recompute(handle, raw_records)

    def _handle_error(self, handle: SubscriptionHandle, err: Exception) -> None:
        if handle is not self._handle:
            return
        const.LOGGER.warning(
            "Leaderboard feed error for organization %s: %s; fetching once",
            handle.organization_id,
            err,
        )
        self._transition(const.SUBSCRIPTION_STATE_ERROR)
        if self._fallback_task is not None and not self._fallback_task.done():
            return
        self._fallback_task = self._create_task(
            self._async_fallback_fetch(handle, self._generation),
            name="orgboard_fallback_fetch",
        )

    def _is_superseded(self, handle: SubscriptionHandle, generation: int) -> bool:
        """True if handle was released or newer data was published meanwhile."""
        return handle is not self._handle or generation != self._generation

    async def _async_fallback_fetch(
        self, handle: SubscriptionHandle, generation: int
    ) -> None:
        try:
            raw_records = await self._data_source.async_fetch_once(
                handle.organization_id
            )
        except Exception as err:  # pylint: disable=broad-exception-caught
            if self._is_superseded(handle, generation):
                return
            const.LOGGER.error(
                "Fallback fetch failed for organization %s: %s; "
                "keeping last known leaderboard",
                handle.organization_id,
                err,
            )
            self._mark_stale()
            self._transition(
                const.SUBSCRIPTION_STATE_LIVE
                if self._snapshot is not None
                else const.SUBSCRIPTION_STATE_IDLE
            )
            return

        if self._is_superseded(handle, generation):
            const.LOGGER.debug(
                "Discarding fallback result superseded by newer data for %s",
                handle.organization_id,
            )
            return
        self._recompute(handle, raw_records)

    async def async_refresh(self) -> bool:
        """Fetch the current record set once and recompute.

        Returns:
            True if a fresh leaderboard was published, False otherwise
            (no open subscription, fetch failure, released meanwhile, or
            newer data published while fetching)
        """
        handle = self._handle
        if handle is None:
            const.LOGGER.debug("Refresh requested without an open subscription")
            return False
        generation = self._generation
        try:
            raw_records = await self._data_source.async_fetch_once(
                handle.organization_id
            )
        except Exception as err:  # pylint: disable=broad-exception-caught
            if not self._is_superseded(handle, generation):
                const.LOGGER.warning(
                    "Manual refresh failed for organization %s: %s",
                    handle.organization_id,
                    err,
                )
                self._mark_stale()
            return False
        if self._is_superseded(handle, generation):
            const.LOGGER.debug(
                "Discarding refresh result superseded by newer data for %s",
                handle.organization_id,
            )
            return False
        self._recompute(handle, raw_records)
        return True

    # =========================================================================
    # PIPELINE
    # =========================================================================

    def _recompute(
        self, handle: SubscriptionHandle, raw_records: list[RawRecord]
    ) -> None:
        """Run the full pipeline over a snapshot and publish the result."""
        self._generation += 1
        records = PointsEngine.normalize_records(raw_records)
        eligible, ineligible = EligibilityEngine.partition(
            records, self.rules.excluded_departments
        )
        self._eligible = eligible
        self._ineligible_count = len(ineligible)

        actor_role = handle.scope.get("actor_role")
        if self._gamification is not None and is_admin_role(actor_role):
            pending = self._gamification.compute_pending(eligible)
            if pending:
                const.LOGGER.debug(
                    "%d record(s) newly qualify for achievements", len(pending)
                )
                self._gamification.schedule_apply(pending, actor_role)

        self._transition(const.SUBSCRIPTION_STATE_LIVE)
        self._publish(stale=False)

    def _build_snapshot(self, stale: bool) -> LeaderboardSnapshot:
        handle = self._handle
        view = RankingEngine.filter_by_department(self._eligible, self._department)
        ranked = RankingEngine.rank(view, self._category)
        rows: list[LeaderboardRow] = [
            {
                **entry,
                "badge": GamificationEngine.classify_entry(entry, index, self.rules),
            }
            for index, entry in enumerate(ranked)
        ]
        return {
            "organization_id": handle.organization_id if handle else "",
            "category": self._category,
            "department": self._department,
            "rows": rows,
            "eligible_count": len(self._eligible),
            "ineligible_count": self._ineligible_count,
            "stale": stale,
            "updated_at": dt_now_iso(),
        }

    def _publish(self, stale: bool) -> None:
        self._snapshot = self._build_snapshot(stale)
        self.emit(self._snapshot)

    def _mark_stale(self) -> None:
        if self._snapshot is None or self._snapshot["stale"]:
            return
        self._snapshot = {**self._snapshot, "stale": True}
        self.emit(self._snapshot)

    # =========================================================================
    # VIEW SELECTION
    # =========================================================================

    def set_category(self, category: str) -> None:
        """Switch the ranking category and re-rank the last eligible set.

        Raises:
            InvalidCategoryError: If category is unknown
        """
        self._category = RankingEngine.validate_category(category)
        self._republish()

    def set_department_filter(self, department: str | None) -> None:
        """Restrict rows to one department (None or "all" for every department)."""
        self._department = (
            None if department == const.DEPARTMENT_FILTER_ALL else department
        )
        self._republish()

    def _republish(self) -> None:
        if self._snapshot is None or self._handle is None:
            return
        self._publish(stale=self._snapshot["stale"])

    def __repr__(self) -> str:
        """Return a debug representation."""
        scope: Any = self.scope
        return (
            f"<{self.__class__.__name__} state={self._state} "
            f"organization={scope['organization_id'] if scope else None} "
            f"category={self._category}>"
        )
