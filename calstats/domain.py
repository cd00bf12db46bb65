"""
Calendar statistics domain models.

These models represent parsed calendar events, the keyword rule set used
to categorize them, and the derived statistics produced by one analysis
run, following the Pydantic v2 patterns used throughout the project.
"""

from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
import logging

logger = logging.getLogger(__name__)


# --- Categorization Rule Models ---


class CategoryDefinition(BaseModel):
    """A general category with its display name and keywords."""

    name: str = Field(..., description="Human-readable category name")
    keywords: List[str] = Field(
        default_factory=list,
        description="Lowercase substrings that select this category",
    )

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, v: List[str]) -> List[str]:
        return [keyword.lower() for keyword in v]


class EventRule(BaseModel):
    """
    A higher-precedence rule for calendar events, mapping a set of
    keywords to the general category it declares.
    """

    keywords: List[str] = Field(default_factory=list)
    category: str = Field(
        ..., description="Category returned when a keyword matches"
    )

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, v: List[str]) -> List[str]:
        return [keyword.lower() for keyword in v]


class NotionRule(BaseModel):
    """Keywords for classifying Notion page titles."""

    keywords: List[str] = Field(default_factory=list)

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, v: List[str]) -> List[str]:
        return [keyword.lower() for keyword in v]


class CategorizationConfig(BaseModel):
    """
    The complete keyword rule set. Read-only for the lifetime of an
    analysis run.
    """

    categories: Dict[str, CategoryDefinition] = Field(
        default_factory=dict,
        description="General categories keyed by category name",
    )
    event_categories: Dict[str, EventRule] = Field(
        default_factory=dict,
        description="Event-specific rules keyed by rule name",
    )
    notion_categories: Dict[str, NotionRule] = Field(
        default_factory=dict,
        description="Page classification rules keyed by category name",
    )


# --- Analysis Input ---


class AnalysisConfig(BaseModel):
    """The window and source directory for one analysis run."""

    start_date: date = Field(..., description="First day, inclusive")
    end_date: date = Field(..., description="Last day, inclusive")
    calendar_dir: Path = Field(
        Path("storage/calendar"),
        description="Root directory searched recursively for .ics files",
    )

    @field_validator("end_date")
    @classmethod
    def end_date_not_before_start_date(cls, v: date, info: Any) -> date:
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must not be before start_date")
        return v


# --- Core Domain Models ---


class Event(BaseModel):
    """
    One calendar occurrence parsed from a VEVENT block.

    Timestamps are either timezone-aware datetimes or None when the source
    property was missing or could not be decoded.
    """

    model_config = ConfigDict(frozen=True)

    uid: str = Field("", description="UID property, may be empty")
    summary: str = Field("", description="SUMMARY property, may be empty")
    start: Optional[datetime] = Field(None, description="DTSTART value")
    end: Optional[datetime] = Field(None, description="DTEND value")
    created: Optional[datetime] = Field(None, description="CREATED value")
    is_all_day: bool = Field(
        False,
        description="True when DTSTART carried an explicit VALUE=DATE",
    )

    @field_validator("start", "end", "created")
    @classmethod
    def ensure_timezone_aware(
        cls, v: Optional[datetime]
    ) -> Optional[datetime]:
        """Treat naive datetimes as UTC so all timestamps compare."""
        if v is not None and v.tzinfo is None:
            logger.debug(f"Treating naive datetime {v} as UTC")
            return v.replace(tzinfo=timezone.utc)
        return v

    def duration(self) -> Optional[timedelta]:
        """Return end - start, or None when either side is absent."""
        if self.start is None or self.end is None:
            return None
        return self.end - self.start


class FileLoadProblem(BaseModel):
    """A calendar file that could not be read during a directory walk."""

    path: str
    error: str


# --- Derived Statistics ---


class TitleStats(BaseModel):
    """Statistics for all events sharing one trimmed title."""

    title: str
    count: int = 0
    duration: timedelta = Field(default_factory=timedelta)

    @property
    def total_days(self) -> int:
        """Whole days represented by duration (all-day view)."""
        return self.duration // timedelta(hours=24)


class CategoryInfo(BaseModel):
    """Details about a single category."""

    count: int = 0
    duration: timedelta = Field(default_factory=timedelta)
    events: List[Event] = Field(default_factory=list)


class EventCategoryStats(BaseModel):
    """Timed event statistics by category and by time bucket."""

    categories: Dict[str, CategoryInfo] = Field(default_factory=dict)
    meeting_time: timedelta = Field(default_factory=timedelta)
    focus_time: timedelta = Field(default_factory=timedelta)
    learning_time: timedelta = Field(default_factory=timedelta)
    admin_time: timedelta = Field(default_factory=timedelta)


class WorkingHoursStats(BaseModel):
    """Distribution of timed event duration across hours and weekdays."""

    hourly_distribution: Dict[int, timedelta] = Field(default_factory=dict)
    daily_distribution: Dict[str, timedelta] = Field(default_factory=dict)
    peak_hours: List[int] = Field(default_factory=list)
    total_working_hours: timedelta = Field(default_factory=timedelta)


class CalendarAnalysis(BaseModel):
    """
    The result of one analysis run, handed to the presentation layer as
    plain read-only data.
    """

    start_date: date
    end_date: date
    events: List[Event] = Field(default_factory=list)
    total_duration: timedelta = Field(default_factory=timedelta)
    title_stats: List[TitleStats] = Field(default_factory=list)
    all_day_stats: List[TitleStats] = Field(default_factory=list)
    category_stats: EventCategoryStats = Field(
        default_factory=EventCategoryStats
    )
    working_hours: WorkingHoursStats = Field(
        default_factory=WorkingHoursStats
    )
    problems: List[FileLoadProblem] = Field(
        default_factory=list,
        description="Files skipped because they could not be read",
    )

    def summary(self) -> Dict[str, Any]:
        """Flat summary mapping, one entry per headline figure."""
        return {
            "Total events": len(self.events),
            "Total duration": self.total_duration,
            "Event titles": len(self.title_stats),
            "All-day events": len(self.all_day_stats),
            "Meeting time": self.category_stats.meeting_time,
            "Focus time": self.category_stats.focus_time,
            "Learning time": self.category_stats.learning_time,
            "Admin time": self.category_stats.admin_time,
            "Total working hours": self.working_hours.total_working_hours,
            "Event categories": len(self.category_stats.categories),
        }
