#!/usr/bin/env python3
"""
CLI for calendar statistics.

Commands:
- analyze: reads .ics exports from a directory, filters them to a date
  window and prints ranked statistics (optionally writing JSON).
- classify: shows how the configured keyword rules classify titles.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from calstats.domain import AnalysisConfig
from calstats.repos.local.calendar import LocalIcsCalendarRepository
from calstats.repos.local.calendar_config import (
    DEFAULT_CONFIG_PATH,
    LocalCategorizationConfigRepository,
)
from calstats.repos.local.keyword_classifier import (
    KeywordClassifierRepository,
)
from calstats.report import generate_report
from calstats.repositories import (
    CalendarDirectoryError,
    MissingCategorizationConfigError,
)
from calstats.usecase import AnalyzeCalendarUseCase

logger = logging.getLogger(__name__)

DEFAULT_CALENDAR_DIR = "storage/calendar"


def setup_logging() -> None:
    """Configure logging based on environment variables"""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        click.echo(
            f"Invalid log level: {log_level}, defaulting to WARNING", err=True
        )
        numeric_level = logging.WARNING

    log_format = os.environ.get(
        "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        force=True,
    )
    logger.debug(
        "Logging configured",
        extra={"log_level": log_level, "numeric_level": numeric_level},
    )


@click.group()
def main() -> None:
    """Calendar statistics from .ics exports."""
    setup_logging()


@main.command()
@click.option(
    "--start-date",
    envvar="START_DATE",
    required=True,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="First day to include, YYYY-MM-DD (defaults to START_DATE env var)",
)
@click.option(
    "--end-date",
    envvar="END_DATE",
    required=True,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Last day to include, YYYY-MM-DD (defaults to END_DATE env var)",
)
@click.option(
    "--calendar-dir",
    envvar="CALENDAR_DIR",
    default=DEFAULT_CALENDAR_DIR,
    show_default=True,
    type=click.Path(),
    help="Directory searched recursively for .ics files",
)
@click.option(
    "--config-path",
    envvar="CATEGORIZATION_CONFIG",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(),
    help="YAML file with categorization rules",
)
@click.option(
    "--output-json",
    default=None,
    type=click.Path(),
    help="Also write the full analysis as JSON to this path.",
)
def analyze(
    start_date: datetime,
    end_date: datetime,
    calendar_dir: str,
    config_path: str,
    output_json: Optional[str],
) -> None:
    """Analyze calendar events between two dates (inclusive)."""
    try:
        analysis_config = AnalysisConfig(
            start_date=start_date.date(),
            end_date=end_date.date(),
            calendar_dir=Path(calendar_dir),
        )
    except ValidationError as e:
        click.echo(f"Error: invalid date range: {e}", err=True)
        sys.exit(1)

    use_case = AnalyzeCalendarUseCase(
        calendar_repo=LocalIcsCalendarRepository(),
        config_repo=LocalCategorizationConfigRepository(config_path),
    )

    click.echo(f"Analyzing calendar events from directory: {calendar_dir}")
    try:
        analysis = use_case.execute(analysis_config)
    except (MissingCategorizationConfigError, CalendarDirectoryError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for problem in analysis.problems:
        click.echo(
            f"Warning: skipped {problem.path}: {problem.error}", err=True
        )

    click.echo(generate_report(analysis))

    if output_json:
        try:
            Path(output_json).write_text(
                analysis.model_dump_json(indent=2), encoding="utf-8"
            )
        except OSError as e:
            click.echo(f"Error: failed to write JSON output: {e}", err=True)
            sys.exit(1)
        click.echo(f"JSON output written to: {Path(output_json).absolute()}")


@main.command()
@click.argument("titles", nargs=-1, required=True)
@click.option(
    "--config-path",
    envvar="CATEGORIZATION_CONFIG",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(),
    help="YAML file with categorization rules",
)
def classify(titles: Tuple[str, ...], config_path: str) -> None:
    """Show the event category, time bucket and page category of titles."""
    try:
        config = LocalCategorizationConfigRepository(config_path).load_config()
    except MissingCategorizationConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    classifier = KeywordClassifierRepository(config)
    for title in titles:
        bucket = classifier.categorize_time_bucket(title)
        click.echo(title)
        click.echo(f"   Event category: {classifier.categorize_event(title)}")
        click.echo(
            f"   Time bucket: {bucket} ({classifier.display_name(bucket)})"
        )
        click.echo(f"   Page category: {classifier.categorize_page(title)}")


if __name__ == "__main__":
    main()
