# SPDX-License-Identifier: MIT

from decimal import Decimal
from typing import TypedDict


class TrendPoint(TypedDict):
    date: str  # YYYY-MM-DD, local calendar day
    average_wellbeing: Decimal
    count: int


class MedicationCorrelation(TypedDict):
    medication: str
    avg_with_med: Decimal
    avg_without_med: Decimal
    count_with_med: int
    count_without_med: int
    difference: Decimal


class JournalSummary(TypedDict):
    total_entries: int
    medication_count: int
    average_wellbeing: Decimal
    unique_medications: list[str]


class CorrelationStrength:
    STRONG_POSITIVE = "strong positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    STRONG_NEGATIVE = "strong negative"
