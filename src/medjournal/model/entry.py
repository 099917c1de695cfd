# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from medjournal.model.entity_id import EntityId


class Entry(TypedDict):
    id: EntityId
    timestamp: Optional[pendulum.DateTime]  # None only for unreadable stored values
    medications: list[str]  # Compared by exact string equality
    wellbeing: Optional[int]  # 1-10, None means "no score"
    notes: Optional[str]


class EntryFields(TypedDict, total=False):
    """Caller-supplied fields for creating or updating an entry."""

    medications: list[str]
    wellbeing: Optional[int]
    notes: Optional[str]
