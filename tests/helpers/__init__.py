"""Test helpers for orgboard tests.

    from tests.helpers import (
        FakeDataSource, FakeAchievementStore, FakeDirectory,
        make_raw_record, make_scope, make_admin_scope, row_ids,
    )

- fakes.py: In-memory data source, achievement store and directory
- builders.py: Raw record and scope builders
"""

from tests.helpers.builders import (
    make_admin_scope,
    make_raw_record,
    make_scope,
    row_ids,
)
from tests.helpers.fakes import FakeAchievementStore, FakeDataSource, FakeDirectory

__all__ = [
    "FakeAchievementStore",
    "FakeDataSource",
    "FakeDirectory",
    "make_admin_scope",
    "make_raw_record",
    "make_scope",
    "row_ids",
]
