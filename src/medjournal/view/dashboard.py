# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table

from medjournal.model.analytics import JournalSummary, MedicationCorrelation
from medjournal.service.analytics import interpret_correlation
from medjournal.view.format import (
    format_difference,
    format_strength,
    format_text,
)
from medjournal.view.header import header

DISCLAIMER = (
    "Note: these correlations are observational and do not establish causation. "
    "Always consult with healthcare professionals about your medications."
)


def _summary_table(summary: JournalSummary) -> Table:
    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("stat", style="cyan")
    summary_table.add_column("value", style="magenta")
    summary_table.add_row("Total entries", str(summary["total_entries"]))
    summary_table.add_row("Unique medications", str(summary["medication_count"]))
    summary_table.add_row("Average well-being", str(summary["average_wellbeing"]))
    return summary_table


def correlation_table(correlations: list[MedicationCorrelation]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("medication")
    table.add_column("with", justify="right")
    table.add_column("without", justify="right")
    table.add_column("difference", justify="right")
    table.add_column("interpretation")

    for correlation in correlations:
        table.add_row(
            format_text(correlation["medication"]),
            f"{correlation['avg_with_med']}/10 ({correlation['count_with_med']})",
            f"{correlation['avg_without_med']}/10 ({correlation['count_without_med']})",
            format_difference(correlation["difference"]),
            format_strength(interpret_correlation(correlation["difference"])),
        )
    return table


def dashboard_view(
    summary: JournalSummary,
    correlations: list[MedicationCorrelation],
    min_count: int,
) -> None:
    """Display summary statistics and ranked medication correlations."""
    header("dashboard")
    console = Console()

    if summary["total_entries"] == 0:
        console.print("[italic]Start logging entries to see your dashboard![/italic]")
        return

    console.print(_summary_table(summary))

    if len(correlations) == 0:
        console.print(
            f"[italic]No medication has been logged at least {min_count} times yet.[/italic]"
        )
        return

    console.print(Padding("[bold]Medication / well-being correlations[/bold]", (0, 1)))
    console.print(correlation_table(correlations))
    console.print(Padding(f"[dim]{DISCLAIMER}[/dim]", (0, 1)))


def single_correlation_view(correlation: MedicationCorrelation, min_count: int) -> None:
    header("correlation")
    console = Console()
    console.print(correlation_table([correlation]))
    if correlation["count_with_med"] < min_count:
        console.print(
            f"[yellow]Only {correlation['count_with_med']} entries include "
            f"{format_text(correlation['medication'])}; at least {min_count} "
            "are needed for a meaningful comparison.[/yellow]"
        )
    console.print(Padding(f"[dim]{DISCLAIMER}[/dim]", (0, 1)))
