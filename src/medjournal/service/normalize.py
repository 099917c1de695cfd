# SPDX-License-Identifier: MIT

from typing import Any, Iterable, Mapping, Optional

import pendulum

from medjournal.model.entry import Entry
from medjournal.time import datetime_from_str_optional

MIN_SCORE = 1
MAX_SCORE = 10


def is_valid_score(value: Any) -> bool:
    # bool is an int subclass, never a score
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_SCORE <= value <= MAX_SCORE
    )


def normalize_score(value: Any) -> Optional[int]:
    """Return the score as an int, or None when it is missing or out of range."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if is_valid_score(value):
        return value
    return None


def normalize_medications(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [med for med in value if isinstance(med, str) and med != ""]


def normalize_notes(value: Any) -> Optional[str]:
    if not isinstance(value, str) or value == "":
        return None
    return value


def normalize_timestamp(value: Any) -> Optional[pendulum.DateTime]:
    if isinstance(value, pendulum.DateTime):
        return value.in_tz("UTC")
    if isinstance(value, str):
        return datetime_from_str_optional(value)
    return None


def normalize_entry(raw: Mapping[str, Any]) -> Entry:
    """
    Convert a deserialized record into an Entry.

    This is the only place where defaults are applied:
    - missing or malformed medications -> []
    - missing, non-integer or out-of-range wellbeing -> None
    - empty notes -> None
    - unreadable timestamp -> None
    """
    return {
        "id": str(raw.get("id", "")),
        "timestamp": normalize_timestamp(raw.get("timestamp")),
        "medications": normalize_medications(raw.get("medications")),
        "wellbeing": normalize_score(raw.get("wellbeing")),
        "notes": normalize_notes(raw.get("notes")),
    }


def normalize_entries(raws: Iterable[Mapping[str, Any]]) -> list[Entry]:
    return [normalize_entry(raw) for raw in raws]


def wellbeing_value(entry: Entry) -> int:
    """Score used for averaging, where "no score" counts as 0."""
    return normalize_score(entry.get("wellbeing")) or 0


def valid_score(entry: Entry) -> Optional[int]:
    """Score used for the distribution, where "no score" is excluded."""
    return normalize_score(entry.get("wellbeing"))


def entry_medications(entry: Entry) -> list[str]:
    return entry.get("medications") or []
