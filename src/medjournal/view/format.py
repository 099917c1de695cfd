# SPDX-License-Identifier: MIT

from decimal import Decimal
from typing import Optional

from rich.markup import escape

from medjournal.model.analytics import CorrelationStrength

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"

STRENGTH_STYLES = {
    CorrelationStrength.STRONG_POSITIVE: "bold green",
    CorrelationStrength.POSITIVE: "green",
    CorrelationStrength.NEUTRAL: "grey70",
    CorrelationStrength.NEGATIVE: "red",
    CorrelationStrength.STRONG_NEGATIVE: "bold red",
}


def format_text(value: Optional[str]) -> str:
    """User text is shown literally, never parsed as markup."""
    return escape(value) if value else ""


def format_medications(medications: list[str]) -> str:
    return format_text(", ".join(medications))


def format_score(score: Optional[int]) -> str:
    return f"{score}/10" if score is not None else "-"


def format_difference(difference: Decimal) -> str:
    return f"+{difference}" if difference > 0 else str(difference)


def format_strength(strength: str) -> str:
    style = STRENGTH_STYLES.get(strength, "")
    return f"[{style}]{strength.title()}[/{style}]" if style else strength.title()


def sparkline(values: list[float], vmin: float = 1.0, vmax: float = 10.0) -> str:
    if not values:
        return ""
    span = max(1e-9, vmax - vmin)
    out = []
    for v in values:
        x = (v - vmin) / span
        idx = int(round(x * (len(SPARK_BLOCKS) - 1)))
        idx = max(0, min(len(SPARK_BLOCKS) - 1, idx))
        out.append(SPARK_BLOCKS[idx])
    return "".join(out)


def bar(count: int, largest: int, width: int = 30) -> str:
    if largest <= 0 or count <= 0:
        return ""
    return "█" * max(1, round(count / largest * width))
