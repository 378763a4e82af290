"""Record and scope builders for orgboard tests."""

from __future__ import annotations

from typing import Any

from orgboard import const

_UNSET: Any = object()


def make_raw_record(
    record_id: str = "user-1",
    *,
    attendance: int = 0,
    collaboration: int = 0,
    efficiency: int = 0,
    innovation: int = 0,
    points: Any = _UNSET,
    department: Any = "Engineering",
    role: Any = const.ROLE_EMPLOYEE,
    organization_id: str | None = "org-1",
    email: str | None = None,
    display_name: str | None = None,
    achievements: list[str] | None = None,
) -> dict[str, Any]:
    """Build a raw document in the data-source shape."""
    raw: dict[str, Any] = {
        const.RAW_ID: record_id,
        const.RAW_DEPARTMENT: department,
        const.RAW_ROLE: role,
        const.RAW_ORGANIZATION_ID: organization_id,
        const.RAW_EMAIL: email or f"{record_id}@example.com",
        const.RAW_POINTS: (
            points
            if points is not _UNSET
            else {
                const.CATEGORY_ATTENDANCE: attendance,
                const.CATEGORY_COLLABORATION: collaboration,
                const.CATEGORY_EFFICIENCY: efficiency,
                const.CATEGORY_INNOVATION: innovation,
            }
        ),
    }
    if display_name is not None:
        raw[const.RAW_DISPLAY_NAME] = display_name
    if achievements is not None:
        raw[const.RAW_ACHIEVEMENTS] = achievements
    return raw


def make_scope(
    organization_id: str = "org-1",
    *,
    actor_role: str | None = const.ROLE_EMPLOYEE,
    actor_id: str | None = "actor-1",
    is_default: bool = False,
) -> dict[str, Any]:
    """Build an OrganizationScope."""
    return {
        "organization_id": organization_id,
        "actor_id": actor_id,
        "actor_role": actor_role,
        "is_default": is_default,
    }


def make_admin_scope(organization_id: str = "org-1") -> dict[str, Any]:
    """Build an OrganizationScope for an admin actor."""
    return make_scope(organization_id, actor_role=const.ROLE_ADMIN, actor_id="admin-1")


def row_ids(snapshot: dict[str, Any] | None) -> list[str]:
    """Return record ids of a published snapshot in rank order."""
    if snapshot is None:
        return []
    return [row["record"][const.DATA_RECORD_ID] for row in snapshot["rows"]]
