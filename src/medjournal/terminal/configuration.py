# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from medjournal import configuration
from medjournal.repository.configuration import CONFIGURATION_REPO
from medjournal.repository.storage import is_valid_key
from medjournal.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _check_storage_key(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_key(value):
        raise typer.BadParameter("use only letters, digits, '_', '.' and '-'")
    return value


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", escape(str(configuration.DATA_PATH)))
    table.add_row("storage_key", escape(config["storage_key"]))
    table.add_row("trend_window_days", str(config["trend_window_days"]))
    table.add_row("min_correlation_entries", str(config["min_correlation_entries"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("config_file", escape(str(configuration.APP_CONFIG_PATH)))

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set_config(
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    storage_key: Annotated[
        Optional[str],
        typer.Option("--storage-key", callback=_check_storage_key),
    ] = None,
    trend_window_days: Annotated[
        Optional[int], typer.Option("--trend-window-days", min=1)
    ] = None,
    min_correlation_entries: Annotated[
        Optional[int], typer.Option("--min-correlation-entries", min=1)
    ] = None,
    show_header: Annotated[
        Optional[bool], typer.Option("--show-header/--hide-header")
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level")] = None,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        storage_key=storage_key,
        trend_window_days=trend_window_days,
        min_correlation_entries=min_correlation_entries,
        show_header=show_header,
        log_level=log_level,
    )
    view()
