# SPDX-License-Identifier: MIT

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

import pendulum

from medjournal.model.analytics import (
    CorrelationStrength,
    JournalSummary,
    MedicationCorrelation,
    TrendPoint,
)
from medjournal.model.entry import Entry
from medjournal.service.normalize import (
    MAX_SCORE,
    MIN_SCORE,
    entry_medications,
    valid_score,
    wellbeing_value,
)
from medjournal.time import datetime_to_local_date_str, now_utc

TWO_PLACES = Decimal("0.01")

STRONG_THRESHOLD = Decimal("1")
MILD_THRESHOLD = Decimal("0.3")


def round_two_places(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _mean(scores: Sequence[int]) -> Decimal:
    return round_two_places(Decimal(sum(scores)) / Decimal(len(scores)))


def get_medication_frequency(entries: Sequence[Entry]) -> dict[str, int]:
    """
    Count how often each medication label appears.

    Counts are over list items, so a label repeated inside one entry is
    counted once per occurrence.
    """
    frequency: dict[str, int] = {}
    for entry in entries:
        for medication in entry_medications(entry):
            frequency[medication] = frequency.get(medication, 0) + 1
    return frequency


def get_average_wellbeing(entries: Sequence[Entry]) -> Decimal:
    """
    Mean well-being score rounded half-up to two places.

    Entries without a usable score count as 0. An empty sequence gives
    Decimal(0) rather than a derived average.
    """
    if len(entries) == 0:
        return Decimal(0)
    return _mean([wellbeing_value(entry) for entry in entries])


def get_wellbeing_trend(
    entries: Sequence[Entry],
    days: int = 30,
    now: Optional[pendulum.DateTime] = None,
) -> list[TrendPoint]:
    """
    Daily average well-being for entries newer than `days` days ago.

    Only entries strictly after the cutoff are kept. Days without entries
    are omitted and the result is sorted by date ascending.
    """
    if now is None:
        now = now_utc()
    cutoff = now.subtract(days=days)

    daily_scores: dict[str, list[int]] = {}
    for entry in entries:
        timestamp = entry.get("timestamp")
        if timestamp is None or not timestamp > cutoff:
            continue
        day = datetime_to_local_date_str(timestamp)
        daily_scores.setdefault(day, []).append(wellbeing_value(entry))

    trend: list[TrendPoint] = [
        {"date": day, "average_wellbeing": _mean(scores), "count": len(scores)}
        for day, scores in daily_scores.items()
    ]
    return sorted(trend, key=lambda point: point["date"])


def get_wellbeing_distribution(entries: Sequence[Entry]) -> dict[int, int]:
    """Number of entries at each score 1-10. Out-of-range scores are dropped."""
    distribution = {score: 0 for score in range(MIN_SCORE, MAX_SCORE + 1)}
    for entry in entries:
        score = valid_score(entry)
        if score is not None:
            distribution[score] += 1
    return distribution


def get_unique_medications(entries: Sequence[Entry]) -> list[str]:
    medications: set[str] = set()
    for entry in entries:
        medications.update(entry_medications(entry))
    return sorted(medications)


def get_medication_correlation(
    entries: Sequence[Entry], medication: str
) -> MedicationCorrelation:
    """
    Compare average well-being with and without a medication.

    The difference is taken between the already rounded averages and then
    rounded again, so it can drift by 0.01 from the difference of the raw
    means.
    """
    with_med = [entry for entry in entries if medication in entry_medications(entry)]
    without_med = [
        entry for entry in entries if medication not in entry_medications(entry)
    ]

    avg_with_med = get_average_wellbeing(with_med)
    avg_without_med = get_average_wellbeing(without_med)

    return {
        "medication": medication,
        "avg_with_med": avg_with_med,
        "avg_without_med": avg_without_med,
        "count_with_med": len(with_med),
        "count_without_med": len(without_med),
        "difference": round_two_places(avg_with_med - avg_without_med),
    }


def rank_correlations(
    entries: Sequence[Entry], min_count: int = 2
) -> list[MedicationCorrelation]:
    correlations = [
        get_medication_correlation(entries, medication)
        for medication in get_unique_medications(entries)
    ]
    correlations = [
        correlation
        for correlation in correlations
        if correlation["count_with_med"] >= min_count
    ]
    return sorted(
        correlations, key=lambda correlation: correlation["difference"], reverse=True
    )


def interpret_correlation(difference: Decimal) -> str:
    if difference > STRONG_THRESHOLD:
        return CorrelationStrength.STRONG_POSITIVE
    elif difference > MILD_THRESHOLD:
        return CorrelationStrength.POSITIVE
    elif difference < -STRONG_THRESHOLD:
        return CorrelationStrength.STRONG_NEGATIVE
    elif difference < -MILD_THRESHOLD:
        return CorrelationStrength.NEGATIVE
    return CorrelationStrength.NEUTRAL


def get_entries_in_range(
    entries: Sequence[Entry],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> list[Entry]:
    """Entries strictly between start and end."""
    return [
        entry
        for entry in entries
        if entry.get("timestamp") is not None
        and start < entry["timestamp"] < end  # type: ignore[operator]
    ]


def get_journal_summary(entries: Sequence[Entry]) -> JournalSummary:
    unique_medications = get_unique_medications(entries)
    return {
        "total_entries": len(entries),
        "medication_count": len(unique_medications),
        "average_wellbeing": get_average_wellbeing(entries),
        "unique_medications": unique_medications,
    }
