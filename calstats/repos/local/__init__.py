"""Local filesystem implementations of calendar statistics repositories."""

from .calendar import LocalIcsCalendarRepository
from .calendar_config import LocalCategorizationConfigRepository
from .keyword_classifier import KeywordClassifierRepository

__all__ = [
    "LocalIcsCalendarRepository",
    "LocalCategorizationConfigRepository",
    "KeywordClassifierRepository",
]
