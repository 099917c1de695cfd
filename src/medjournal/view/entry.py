# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from medjournal.model.entry import Entry
from medjournal.time import datetime_to_display_local_datetime_str_optional
from medjournal.view.format import (
    format_medications,
    format_score,
    format_text,
)
from medjournal.view.header import header


def entries_view(
    report_name: str,
    entries: list[Entry],
    columns: list[str] = ["id", "timestamp", "medications", "wellbeing", "notes"],
) -> None:
    """Display a list of entries in a table."""
    header(report_name)

    if len(entries) == 0:
        Console().print("[italic]No entries yet.[/italic]")
        return

    entries_table = Table(box=box.SIMPLE)
    for column in columns:
        entries_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = format_text(entry["id"])
            elif column == "timestamp":
                column_value = datetime_to_display_local_datetime_str_optional(
                    entry["timestamp"]
                )
            elif column == "medications":
                column_value = format_medications(entry["medications"])
            elif column == "wellbeing":
                column_value = format_score(entry["wellbeing"])
            elif column == "notes":
                column_value = format_text(entry["notes"])
            row.append(column_value)
        entries_table.add_row(*row)

    console = Console()
    console.print(entries_table)


def single_entry_view(entry: Entry) -> None:
    """Display detailed view of a single entry."""
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", format_text(entry["id"]))
    entry_table.add_row(
        "timestamp",
        datetime_to_display_local_datetime_str_optional(entry["timestamp"]),
    )
    entry_table.add_row("medications", format_medications(entry["medications"]))
    entry_table.add_row("wellbeing", format_score(entry["wellbeing"]))
    entry_table.add_row("notes", format_text(entry["notes"]))

    console = Console()
    console.print(entry_table)
