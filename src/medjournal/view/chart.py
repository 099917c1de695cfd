# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table

from medjournal.model.analytics import TrendPoint
from medjournal.view.format import bar, format_text, sparkline
from medjournal.view.header import header


def frequency_table(frequency: dict[str, int]) -> Table:
    table = Table(box=box.SIMPLE, title="Times taken")
    table.add_column("medication")
    table.add_column("count", justify="right")
    table.add_column("")

    largest = max(frequency.values(), default=0)
    for medication, count in sorted(
        frequency.items(), key=lambda item: (-item[1], item[0])
    ):
        table.add_row(
            format_text(medication),
            str(count),
            f"[blue]{bar(count, largest)}[/blue]",
        )
    return table


def trend_table(trend: list[TrendPoint], days: int) -> Table:
    table = Table(box=box.SIMPLE, title=f"Well-being, last {days} days")
    table.add_column("date")
    table.add_column("average", justify="right")
    table.add_column("entries", justify="right")

    for point in trend:
        table.add_row(point["date"], str(point["average_wellbeing"]), str(point["count"]))
    return table


def distribution_table(distribution: dict[int, int]) -> Table:
    table = Table(box=box.SIMPLE, title="Well-being distribution")
    table.add_column("score", justify="right")
    table.add_column("entries", justify="right")
    table.add_column("")

    largest = max(distribution.values(), default=0)
    for score, count in distribution.items():
        table.add_row(str(score), str(count), f"[cyan]{bar(count, largest)}[/cyan]")
    return table


def charts_view(
    frequency: dict[str, int],
    trend: list[TrendPoint],
    distribution: dict[int, int],
    days: int,
) -> None:
    """Display frequency, trend and distribution charts."""
    header("charts")
    console = Console()

    if len(frequency) == 0 and sum(distribution.values()) == 0:
        console.print("[italic]No data to chart yet.[/italic]")
        return

    console.print(frequency_table(frequency))

    if len(trend) > 0:
        console.print(trend_table(trend, days))
        line = sparkline([float(point["average_wellbeing"]) for point in trend])
        console.print(Padding(f"[green]{line}[/green]", (0, 1)))
    else:
        console.print(f"[italic]No entries in the last {days} days.[/italic]")

    console.print(distribution_table(distribution))
