# SPDX-License-Identifier: MIT

from medjournal.model.entity_id import generate_entity_id
from medjournal.model.entry import Entry
from medjournal.time import now_utc


def get_entry_template() -> Entry:
    return {
        "id": generate_entity_id(),
        "timestamp": now_utc(),
        "medications": [],
        "wellbeing": None,
        "notes": None,
    }
