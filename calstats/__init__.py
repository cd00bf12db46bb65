"""
Calendar statistics package.

This package parses calendar exports, classifies events with keyword
rules and produces ranked statistics, following Clean Architecture
principles.
"""

from .domain import (
    AnalysisConfig,
    CalendarAnalysis,
    CategorizationConfig,
    CategoryDefinition,
    CategoryInfo,
    Event,
    EventCategoryStats,
    EventRule,
    FileLoadProblem,
    NotionRule,
    TitleStats,
    WorkingHoursStats,
)
from .repositories import (
    CalendarDirectoryError,
    CalendarEventRepository,
    CategorizationConfigRepository,
    EventClassifierRepository,
    MissingCategorizationConfigError,
)
from .usecase import AnalyzeCalendarUseCase

__all__ = [
    # Parsed events and configuration
    "AnalysisConfig",
    "Event",
    "FileLoadProblem",
    "CategorizationConfig",
    "CategoryDefinition",
    "EventRule",
    "NotionRule",
    # Derived statistics
    "CalendarAnalysis",
    "TitleStats",
    "CategoryInfo",
    "EventCategoryStats",
    "WorkingHoursStats",
    # Repository protocols and errors
    "CalendarEventRepository",
    "CategorizationConfigRepository",
    "EventClassifierRepository",
    "MissingCategorizationConfigError",
    "CalendarDirectoryError",
    # Use Cases
    "AnalyzeCalendarUseCase",
]
