# SPDX-License-Identifier: MIT

from typing import Optional, Union

from medjournal.model.entry import EntryFields
from medjournal.service.normalize import MAX_SCORE, MIN_SCORE, is_valid_score


class EntryValidationError(Exception):
    """Raised when entry input validation fails."""

    pass


def parse_medications(raw: str) -> list[str]:
    """Split a comma separated list, trimming items and dropping empty ones."""
    return [med.strip() for med in raw.split(",") if med.strip() != ""]


def validate_wellbeing(wellbeing: int) -> int:
    if not is_valid_score(wellbeing):
        raise EntryValidationError(
            f"Well-being must be a whole number from {MIN_SCORE} to {MAX_SCORE}, "
            f"got {wellbeing!r}."
        )
    return wellbeing


def validate_medications(medications: list[str]) -> list[str]:
    if len(medications) == 0:
        raise EntryValidationError("Please enter at least one medication or vitamin.")
    return medications


def clean_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None:
        return None
    notes = notes.strip()
    return notes if notes != "" else None


def build_entry_fields(
    medications: Union[list[str], str],
    wellbeing: int,
    notes: Optional[str] = None,
) -> EntryFields:
    """
    Validate raw capture input and package it for the entry repository.

    Raises EntryValidationError if no medication remains after parsing or
    the score is outside the 1-10 range.
    """
    if isinstance(medications, str):
        medications = parse_medications(medications)
    else:
        medications = [med.strip() for med in medications if med.strip() != ""]

    return {
        "medications": validate_medications(medications),
        "wellbeing": validate_wellbeing(wellbeing),
        "notes": clean_notes(notes),
    }
