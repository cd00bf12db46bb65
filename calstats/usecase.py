"""
Defines the use cases for calendar statistics.
"""

import logging
from typing import Callable, List

from .domain import (
    AnalysisConfig,
    CalendarAnalysis,
    CategorizationConfig,
    FileLoadProblem,
)
from .repositories import (
    CalendarEventRepository,
    CategorizationConfigRepository,
    EventClassifierRepository,
)
from .repos.local.keyword_classifier import KeywordClassifierRepository
from .stats import (
    analyze_category_stats,
    analyze_working_hours,
    calculate_all_day_stats,
    calculate_title_stats,
    calculate_total_duration,
    filter_events_by_date_range,
    group_events_by_title,
    sort_events_by_start,
)

logger = logging.getLogger(__name__)

ClassifierFactory = Callable[
    [CategorizationConfig], EventClassifierRepository
]


class AnalyzeCalendarUseCase:
    """
    Produces calendar statistics for a date window.

    This use case depends only on repository abstractions. It loads the
    categorization rules, reads every event beneath the calendar
    directory, filters them to the requested window and derives all
    statistics from scratch.
    """

    def __init__(
        self,
        calendar_repo: CalendarEventRepository,
        config_repo: CategorizationConfigRepository,
        classifier_factory: ClassifierFactory = KeywordClassifierRepository,
    ):
        self.calendar_repo = calendar_repo
        self.config_repo = config_repo
        self.classifier_factory = classifier_factory

    def execute(self, config: AnalysisConfig) -> CalendarAnalysis:
        """
        Runs one analysis.

        1. Loads the categorization rules (fails before any file is read).
        2. Validates the calendar directory.
        3. Loads events, collecting unreadable files as problems.
        4. Filters to the window and sorts by start.
        5. Computes per-title, all-day, category and working-hours stats.

        Raises:
            MissingCategorizationConfigError: If no rule set is available.
            CalendarDirectoryError: If the calendar directory is unusable.
        """
        categorization = self.config_repo.load_config()
        classifier = self.classifier_factory(categorization)

        self.calendar_repo.validate_directory(config.calendar_dir)

        logger.info(
            "Analyzing calendar events",
            extra={
                "calendar_dir": str(config.calendar_dir),
                "start_date": config.start_date.isoformat(),
                "end_date": config.end_date.isoformat(),
            },
        )

        problems: List[FileLoadProblem] = []
        all_events = self.calendar_repo.load_events(
            config.calendar_dir, problems
        )

        events = sort_events_by_start(
            filter_events_by_date_range(
                all_events, config.start_date, config.end_date
            )
        )
        grouped = group_events_by_title(events)

        analysis = CalendarAnalysis(
            start_date=config.start_date,
            end_date=config.end_date,
            events=events,
            total_duration=calculate_total_duration(events),
            title_stats=calculate_title_stats(grouped),
            all_day_stats=calculate_all_day_stats(grouped),
            category_stats=analyze_category_stats(events, classifier),
            working_hours=analyze_working_hours(events),
            problems=problems,
        )

        logger.info(
            "Calendar analysis completed",
            extra={
                "parsed_events": len(all_events),
                "events_in_range": len(events),
                "title_count": len(analysis.title_stats),
                "problem_count": len(problems),
            },
        )
        return analysis
