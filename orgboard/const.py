# File: const.py
"""Constants for the orgboard leaderboard engine.

This file centralizes record field keys, point categories, roles, rule-table
defaults, badge kinds and subscription states for consistency across the
engines and managers.
"""

import logging

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Raw Record Keys (shape delivered by the data source)
# ------------------------------------------------------------------------------------------------
RAW_ID = "id"
RAW_DISPLAY_NAME = "displayName"
RAW_EMAIL = "email"
RAW_ORGANIZATION_ID = "organizationId"
RAW_DEPARTMENT = "department"
RAW_ROLE = "role"
RAW_POINTS = "points"
RAW_ACHIEVEMENTS = "achievements"

# ------------------------------------------------------------------------------------------------
# Canonical Record Keys
# ------------------------------------------------------------------------------------------------
DATA_RECORD_ID = "id"
DATA_RECORD_DISPLAY_NAME = "display_name"
DATA_RECORD_EMAIL = "email"
DATA_RECORD_ORGANIZATION_ID = "organization_id"
DATA_RECORD_DEPARTMENT = "department"
DATA_RECORD_ROLE = "role"
DATA_RECORD_POINTS = "points"
DATA_RECORD_ACHIEVEMENTS = "achievements"
DATA_RECORD_LEGACY_POINTS = "legacy_points"

# ------------------------------------------------------------------------------------------------
# Point Categories
# ------------------------------------------------------------------------------------------------
CATEGORY_ATTENDANCE = "attendance"
CATEGORY_COLLABORATION = "collaboration"
CATEGORY_EFFICIENCY = "efficiency"
CATEGORY_INNOVATION = "innovation"
CATEGORY_TOTAL = "total"
CATEGORY_COMPOSITE = "composite"

POINT_CATEGORIES: tuple[str, ...] = (
    CATEGORY_ATTENDANCE,
    CATEGORY_COLLABORATION,
    CATEGORY_EFFICIENCY,
    CATEGORY_INNOVATION,
)

# Categories a leaderboard can be sorted by
RANKING_CATEGORIES: tuple[str, ...] = (CATEGORY_TOTAL, *POINT_CATEGORIES)

# Categories an achievement definition may reference
ACHIEVEMENT_CATEGORIES: tuple[str, ...] = (*RANKING_CATEGORIES, CATEGORY_COMPOSITE)

DEFAULT_CATEGORY = CATEGORY_TOTAL
DEFAULT_ZERO = 0

# ------------------------------------------------------------------------------------------------
# Roles
# ------------------------------------------------------------------------------------------------
ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"

# ------------------------------------------------------------------------------------------------
# Eligibility
# ------------------------------------------------------------------------------------------------
# Case-insensitive exact matches; anything else is eligible
DEFAULT_EXCLUDED_DEPARTMENTS: frozenset[str] = frozenset(
    {
        # Human resources
        "hr",
        "h.r.",
        "h r",
        "h.r",
        "h-r",
        "h r dept",
        "hr dept",
        "hr department",
        "human resources",
        "hum res",
        "hresources",
        "personnel",
        "people ops",
        # Management
        "management",
        "mgmt",
        "mngt",
        "managment",
        "mgr",
        "managers",
        "the management",
        "executive",
        "executives",
        "c-suite",
        "senior management",
        "leadership",
        # Administration
        "admin",
        "administration",
        "administrative",
        "office admin",
        "general admin",
    }
)

ELIGIBILITY_REASON_ELIGIBLE = "eligible"
ELIGIBILITY_REASON_MISSING_RECORD = "missing_record"
ELIGIBILITY_REASON_ADMIN_ROLE = "admin_role"
ELIGIBILITY_REASON_EXCLUDED_DEPARTMENT = "excluded_department"

ELIGIBILITY_MESSAGES: dict[str, str] = {
    ELIGIBILITY_REASON_ELIGIBLE: (
        "User meets all requirements for leaderboard participation"
    ),
    ELIGIBILITY_REASON_MISSING_RECORD: "User information required",
    ELIGIBILITY_REASON_ADMIN_ROLE: (
        "Administrative staff are excluded from leaderboard participation"
    ),
    ELIGIBILITY_REASON_EXCLUDED_DEPARTMENT: (
        "HR and Management departments are excluded to maintain fairness"
    ),
}

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_NAME = "name"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_CATEGORY = "category"
DATA_ACHIEVEMENT_THRESHOLD = "threshold"
DATA_ACHIEVEMENT_RULE = "rule"
DATA_ACHIEVEMENT_ICON = "icon"

ACHIEVEMENT_RULE_THRESHOLD = "threshold"
ACHIEVEMENT_RULE_ALL_CATEGORIES = "all_categories"
ACHIEVEMENT_RULES: tuple[str, ...] = (
    ACHIEVEMENT_RULE_THRESHOLD,
    ACHIEVEMENT_RULE_ALL_CATEGORIES,
)

ACHIEVEMENT_ID_ATTENDANCE_MASTER = "attendance_master"
ACHIEVEMENT_ID_COLLABORATION_CHAMPION = "collaboration_champion"
ACHIEVEMENT_ID_EFFICIENCY_EXPERT = "efficiency_expert"
ACHIEVEMENT_ID_INNOVATION_LEADER = "innovation_leader"
ACHIEVEMENT_ID_ALL_ROUNDER = "all_rounder"
ACHIEVEMENT_ID_TOTAL_CHAMPION = "total_champion"

DEFAULT_CATEGORY_ACHIEVEMENT_THRESHOLD = 100
DEFAULT_ALL_ROUNDER_FLOOR = 50
DEFAULT_TOTAL_CHAMPION_FLOOR = 500

DEFAULT_ACHIEVEMENTS: tuple[dict[str, object], ...] = (
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_ATTENDANCE_MASTER,
        DATA_ACHIEVEMENT_NAME: "Attendance Master",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 100 attendance points",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_ATTENDANCE,
        DATA_ACHIEVEMENT_THRESHOLD: DEFAULT_CATEGORY_ACHIEVEMENT_THRESHOLD,
        DATA_ACHIEVEMENT_ICON: "calendar",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_COLLABORATION_CHAMPION,
        DATA_ACHIEVEMENT_NAME: "Collaboration Champion",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 100 collaboration points",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_COLLABORATION,
        DATA_ACHIEVEMENT_THRESHOLD: DEFAULT_CATEGORY_ACHIEVEMENT_THRESHOLD,
        DATA_ACHIEVEMENT_ICON: "handshake",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_EFFICIENCY_EXPERT,
        DATA_ACHIEVEMENT_NAME: "Efficiency Expert",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 100 efficiency points",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_EFFICIENCY,
        DATA_ACHIEVEMENT_THRESHOLD: DEFAULT_CATEGORY_ACHIEVEMENT_THRESHOLD,
        DATA_ACHIEVEMENT_ICON: "lightning",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_INNOVATION_LEADER,
        DATA_ACHIEVEMENT_NAME: "Innovation Leader",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 100 innovation points",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_INNOVATION,
        DATA_ACHIEVEMENT_THRESHOLD: DEFAULT_CATEGORY_ACHIEVEMENT_THRESHOLD,
        DATA_ACHIEVEMENT_ICON: "lightbulb",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_ALL_ROUNDER,
        DATA_ACHIEVEMENT_NAME: "All-Rounder",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 50 points in all categories",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_COMPOSITE,
        DATA_ACHIEVEMENT_THRESHOLD: 0,
        DATA_ACHIEVEMENT_RULE: ACHIEVEMENT_RULE_ALL_CATEGORIES,
        DATA_ACHIEVEMENT_ICON: "star",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_ID_TOTAL_CHAMPION,
        DATA_ACHIEVEMENT_NAME: "Total Champion",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach 500 total points",
        DATA_ACHIEVEMENT_CATEGORY: CATEGORY_TOTAL,
        DATA_ACHIEVEMENT_THRESHOLD: DEFAULT_TOTAL_CHAMPION_FLOOR,
        DATA_ACHIEVEMENT_ICON: "crown",
    },
)

# ------------------------------------------------------------------------------------------------
# Badges (transient, rank-derived)
# ------------------------------------------------------------------------------------------------
BADGE_TOP10 = "top10"
BADGE_CONSISTENT = "consistent"

DEFAULT_BADGE_TOP_N = 10
DEFAULT_BADGE_CONSISTENT_SCORE = 1000

# ------------------------------------------------------------------------------------------------
# Organization Scope
# ------------------------------------------------------------------------------------------------
DEFAULT_ORGANIZATION_ID = "default"

ACTOR_ID = "id"
ACTOR_ROLE = "role"
ACTOR_ORGANIZATION_ID = "organizationId"

# ------------------------------------------------------------------------------------------------
# Rule Table Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_ACHIEVEMENTS = "achievements"
CONF_EXCLUDED_DEPARTMENTS = "excluded_departments"
CONF_ALL_ROUNDER_FLOOR = "all_rounder_floor"
CONF_BADGE_TOP_N = "badge_top_n"
CONF_BADGE_CONSISTENT_SCORE = "badge_consistent_score"
CONF_DEFAULT_ORGANIZATION_ID = "default_organization_id"

# ------------------------------------------------------------------------------------------------
# Subscription States
# ------------------------------------------------------------------------------------------------
SUBSCRIPTION_STATE_IDLE = "idle"
SUBSCRIPTION_STATE_SUBSCRIBING = "subscribing"
SUBSCRIPTION_STATE_LIVE = "live"
SUBSCRIPTION_STATE_ERROR = "error"
SUBSCRIPTION_STATE_TORN_DOWN = "torn_down"

# Department view filter value meaning "no filter"
DEPARTMENT_FILTER_ALL = "all"
