"""Boundary protocols implemented by external collaborators.

orgboard does not implement storage or transport. A host application passes
objects satisfying these protocols to the managers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from .type_defs import AchievementId, RawRecord, RecordId

SnapshotCallback = Callable[[list[RawRecord]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class DataSource(Protocol):
    """Push/pull access to one organization's directory records."""

    def subscribe(
        self,
        organization_id: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Open a live feed delivering the full current record set per notification.

        Returns a callable that closes the feed.
        """

    async def async_fetch_once(self, organization_id: str) -> list[RawRecord]:
        """Fetch the full current record set once (error-path fallback)."""


@runtime_checkable
class AchievementStore(Protocol):
    """Append-only persistence for achievement grants."""

    async def async_grant_achievements(
        self, record_id: RecordId, achievement_ids: Sequence[AchievementId]
    ) -> bool:
        """Merge ids into the record's achievements; return False on failure."""


@runtime_checkable
class DirectoryLookup(Protocol):
    """Single-record lookup used to resolve the actor's organization."""

    async def async_get_record(self, record_id: RecordId) -> RawRecord | None:
        """Return the stored record for record_id, or None if absent."""
