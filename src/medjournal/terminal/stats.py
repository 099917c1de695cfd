# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from medjournal.repository.configuration import CONFIGURATION_REPO
from medjournal.repository.entry import get_entry_repository
from medjournal.service.analytics import (
    get_journal_summary,
    get_medication_correlation,
    get_medication_frequency,
    get_wellbeing_distribution,
    get_wellbeing_trend,
    rank_correlations,
)
from medjournal.view.chart import charts_view
from medjournal.view.dashboard import dashboard_view, single_correlation_view


def dashboard(
    min_count: Annotated[
        Optional[int],
        typer.Option(
            "--min-count",
            help="Only rank medications logged at least this many times",
        ),
    ] = None,
) -> None:
    """Show summary statistics and medication correlations."""
    config = CONFIGURATION_REPO.get_config()
    if min_count is None:
        min_count = config["min_correlation_entries"]

    entries = get_entry_repository().get_all_entries()
    dashboard_view(
        get_journal_summary(entries),
        rank_correlations(entries, min_count),
        min_count,
    )


def charts(
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", help="Trend window in days"),
    ] = None,
) -> None:
    """Show medication frequency, well-being trend and distribution."""
    config = CONFIGURATION_REPO.get_config()
    if days is None:
        days = config["trend_window_days"]

    entries = get_entry_repository().get_all_entries()
    charts_view(
        get_medication_frequency(entries),
        get_wellbeing_trend(entries, days),
        get_wellbeing_distribution(entries),
        days,
    )


def correlation(medication: str) -> None:
    """Compare well-being with and without one medication."""
    config = CONFIGURATION_REPO.get_config()
    entries = get_entry_repository().get_all_entries()
    single_correlation_view(
        get_medication_correlation(entries, medication),
        config["min_correlation_entries"],
    )
