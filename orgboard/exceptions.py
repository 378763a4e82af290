"""Exceptions raised by orgboard.

Engines never raise for malformed data; these cover caller mistakes
(unknown category, illegal lifecycle call, missing privilege, bad config).
"""

from __future__ import annotations


class OrgBoardError(Exception):
    """Base class for orgboard errors."""


class InvalidCategoryError(OrgBoardError, ValueError):
    """Raised when a ranking category is not one of the known categories.

    Attributes:
        category: The rejected category key
    """

    def __init__(self, category: object) -> None:
        """Initialize InvalidCategoryError."""
        self.category = category
        super().__init__(f"Unknown ranking category: {category!r}")


class InvalidTransitionError(OrgBoardError):
    """Raised when the subscription lifecycle is driven through an illegal edge.

    Attributes:
        current_state: State the manager was in
        target_state: State that was requested
    """

    def __init__(self, current_state: str, target_state: str) -> None:
        """Initialize InvalidTransitionError."""
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"Invalid subscription transition: {current_state} -> {target_state}"
        )


class UnauthorizedGrantError(OrgBoardError):
    """Raised when a non-admin actor attempts to persist achievement grants."""

    def __init__(self, actor_role: str | None) -> None:
        """Initialize UnauthorizedGrantError."""
        self.actor_role = actor_role
        super().__init__(
            f"Achievement grants require an admin actor (role={actor_role!r})"
        )


class RulesConfigError(OrgBoardError):
    """Raised when a rule-table configuration fails validation."""
