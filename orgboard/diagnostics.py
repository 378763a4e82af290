"""Diagnostics support for orgboard.

Returns a troubleshooting summary of a leaderboard manager: lifecycle state,
scope, view selection and counts. Record contents (names, emails, points)
are never included.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .managers.gamification_manager import GamificationManager
    from .managers.leaderboard_manager import LeaderboardManager


def get_leaderboard_diagnostics(
    manager: LeaderboardManager,
    gamification: GamificationManager | None = None,
) -> dict[str, Any]:
    """Return diagnostics for a leaderboard manager."""
    snapshot = manager.snapshot
    scope = manager.scope
    diagnostics: dict[str, Any] = {
        "state": manager.state,
        "organization_id": scope["organization_id"] if scope else None,
        "default_scope": scope["is_default"] if scope else None,
        "category": manager.category,
        "department": manager.department,
        "subscription_active": bool(manager.handle and manager.handle.active),
        "pending_tasks": manager.pending_task_count,
        "published": snapshot is not None,
        "stale": snapshot["stale"] if snapshot else None,
        "updated_at": snapshot["updated_at"] if snapshot else None,
        "row_count": len(snapshot["rows"]) if snapshot else 0,
        "eligible_count": snapshot["eligible_count"] if snapshot else 0,
        "ineligible_count": snapshot["ineligible_count"] if snapshot else 0,
        "achievement_definitions": len(manager.rules.achievements),
        "excluded_departments": len(manager.rules.excluded_departments),
    }
    if gamification is not None:
        diagnostics["grants_in_flight"] = len(gamification.in_flight)
    return diagnostics
