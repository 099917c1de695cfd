# SPDX-License-Identifier: MIT

from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console

from medjournal.model.entry import EntryFields
from medjournal.repository.entry import EntryStoreError, get_entry_repository
from medjournal.service.capture import (
    EntryValidationError,
    build_entry_fields,
    clean_notes,
    parse_medications,
    validate_medications,
    validate_wellbeing,
)
from medjournal.view.entry import entries_view, single_entry_view

console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    console.print(message, style="red", markup=False)
    raise typer.Exit(1)


def add(
    medications: Annotated[
        str, typer.Argument(help="Comma separated, e.g. 'Vitamin D, Magnesium'")
    ],
    wellbeing: Annotated[
        int, typer.Option("--wellbeing", "-w", help="How you feel, 1-10")
    ] = 5,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    """Log a new entry."""
    try:
        fields = build_entry_fields(medications, wellbeing, notes)
        entry = get_entry_repository().save_new_entry(fields)
    except (EntryValidationError, EntryStoreError) as e:
        _fail(str(e))

    single_entry_view(entry)


def modify(
    id: str,
    medications: Annotated[
        Optional[str], typer.Option("--medications", "-m", help="Comma separated")
    ] = None,
    wellbeing: Annotated[Optional[int], typer.Option("--wellbeing", "-w")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
    remove_notes: Annotated[bool, typer.Option("--remove-notes", "-rn")] = False,
) -> None:
    """Change fields of an existing entry."""
    fields: EntryFields = {}
    try:
        if medications is not None:
            fields["medications"] = validate_medications(
                parse_medications(medications)
            )
        if wellbeing is not None:
            fields["wellbeing"] = validate_wellbeing(wellbeing)
        if notes is not None:
            fields["notes"] = clean_notes(notes)
        if remove_notes:
            fields["notes"] = None

        entry = get_entry_repository().modify_entry(id, fields)
    except (EntryValidationError, EntryStoreError) as e:
        _fail(str(e))

    if entry is None:
        _fail(f"No entry with id {id}.")
    single_entry_view(entry)


def delete(id: str) -> None:
    """Delete an entry."""
    repository = get_entry_repository()
    if repository.get_entry(id) is None:
        _fail(f"No entry with id {id}.")
    if not repository.delete_entry(id):
        _fail("Error deleting entry. Please try again.")
    Console().print(f"Deleted entry {id}.", markup=False)


def clear(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Confirm removing every entry")
    ] = False,
) -> None:
    """Remove every entry."""
    if not yes:
        _fail("Refusing to clear all entries without --yes.")
    if not get_entry_repository().clear_entries():
        _fail("Error clearing entries. Please try again.")
    Console().print("Cleared all entries.")


def list_entries(
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-l", help="Show only the newest N")
    ] = None,
) -> None:
    """List entries, newest first."""
    entries = get_entry_repository().get_all_entries()
    entries = sorted(
        entries,
        key=lambda entry: entry["timestamp"].timestamp() if entry["timestamp"] else 0,
        reverse=True,
    )
    if limit is not None:
        entries = entries[:limit]
    entries_view("entries", entries)
