# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from medjournal.initialize import initialize
from medjournal.terminal import configuration, entry, stats
from medjournal.terminal.custom_typer import AliasedTyperGroup
from medjournal.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="medjournal - Medication and well-being journal in the CLI",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(entry.add)
app.command(name="modify, m", no_args_is_help=True)(entry.modify)
app.command(name="delete, d", no_args_is_help=True)(entry.delete)
app.command(name="list, ls")(entry.list_entries)
app.command(name="clear")(entry.clear)
app.command(name="dashboard, db")(stats.dashboard)
app.command(name="charts, ch")(stats.charts)
app.command(name="correlation, co", no_args_is_help=True)(stats.correlation)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    medjournal - Medication and well-being journal in the CLI

    Global options that apply to all commands.
    """
    initialize(verbose=verbose)
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
