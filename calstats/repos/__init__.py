"""Repositories for calendar statistics."""

from .local.calendar import LocalIcsCalendarRepository
from .local.keyword_classifier import KeywordClassifierRepository

__all__ = [
    "LocalIcsCalendarRepository",
    "KeywordClassifierRepository",
]
