"""Eligibility Engine - Pure logic for leaderboard participation rules.

Maintains competitive fairness by excluding the evaluators of performance
(HR, management, administrators) from the rankings they influence.

Rules, in order:
1. role == admin -> ineligible
2. missing, blank or non-string department -> ineligible
3. trimmed, casefolded department in the exclusion set -> ineligible
4. otherwise eligible

The exclusion set is an enumerated list matched exactly, never by substring.
"Human Resources Department" is eligible unless that exact spelling is listed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..type_defs import EligibilityResult, ParticipantRecord


def is_admin_role(role: Any) -> bool:
    """Return True if role carries administrative standing."""
    return isinstance(role, str) and role.strip().casefold() == const.ROLE_ADMIN


class EligibilityEngine:
    """Pure logic engine for eligibility decisions.

    All methods are static and deterministic in (role, department).
    Records may be canonical ParticipantRecords or raw documents; only the
    `role` and `department` keys are read, which both shapes share.
    """

    @staticmethod
    def is_department_allowed(
        department: Any,
        excluded: frozenset[str] = const.DEFAULT_EXCLUDED_DEPARTMENTS,
    ) -> bool:
        """Check whether a department may take part in rankings.

        Args:
            department: Free-text department name
            excluded: Casefolded exclusion set

        Returns:
            False for non-strings, blank names and excluded names
        """
        if not isinstance(department, str):
            return False
        normalized = department.strip().casefold()
        if not normalized:
            return False
        return normalized not in excluded

    @staticmethod
    def is_eligible(
        record: Mapping[str, Any] | None,
        excluded: frozenset[str] = const.DEFAULT_EXCLUDED_DEPARTMENTS,
    ) -> bool:
        """Return True if the record may appear in a ranking."""
        return EligibilityEngine.validate_eligibility(record, excluded)["eligible"]

    @staticmethod
    def validate_eligibility(
        record: Mapping[str, Any] | None,
        excluded: frozenset[str] = const.DEFAULT_EXCLUDED_DEPARTMENTS,
    ) -> EligibilityResult:
        """Evaluate eligibility and explain the verdict.

        Returns:
            EligibilityResult with a reason code from const.ELIGIBILITY_REASON_*
        """
        if not isinstance(record, Mapping):
            reason = const.ELIGIBILITY_REASON_MISSING_RECORD
        elif is_admin_role(record.get(const.DATA_RECORD_ROLE)):
            reason = const.ELIGIBILITY_REASON_ADMIN_ROLE
        elif not EligibilityEngine.is_department_allowed(
            record.get(const.DATA_RECORD_DEPARTMENT), excluded
        ):
            reason = const.ELIGIBILITY_REASON_EXCLUDED_DEPARTMENT
        else:
            reason = const.ELIGIBILITY_REASON_ELIGIBLE

        return {
            "eligible": reason == const.ELIGIBILITY_REASON_ELIGIBLE,
            "reason": reason,
            "message": const.ELIGIBILITY_MESSAGES[reason],
        }

    @staticmethod
    def filter_eligible(
        records: Iterable[ParticipantRecord] | None,
        excluded: frozenset[str] = const.DEFAULT_EXCLUDED_DEPARTMENTS,
    ) -> list[ParticipantRecord]:
        """Return eligible records in their original order (idempotent)."""
        if records is None:
            return []
        return [
            record
            for record in records
            if EligibilityEngine.is_eligible(record, excluded)
        ]

    @staticmethod
    def partition(
        records: Iterable[ParticipantRecord],
        excluded: frozenset[str] = const.DEFAULT_EXCLUDED_DEPARTMENTS,
    ) -> tuple[list[ParticipantRecord], list[ParticipantRecord]]:
        """Split records into (eligible, ineligible), each order-preserving."""
        eligible: list[ParticipantRecord] = []
        ineligible: list[ParticipantRecord] = []
        for record in records:
            if EligibilityEngine.is_eligible(record, excluded):
                eligible.append(record)
            else:
                ineligible.append(record)
        return eligible, ineligible
