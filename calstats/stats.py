"""
Filtering, grouping and ranking of parsed calendar events.

Every function here is pure: statistics are re-derived from the full
filtered event list on each run and nothing is cached between calls.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Sequence

from .domain import (
    CategoryInfo,
    Event,
    EventCategoryStats,
    TitleStats,
    WorkingHoursStats,
)
from .repositories import EventClassifierRepository

logger = logging.getLogger(__name__)

DAY = timedelta(hours=24)
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
PEAK_HOUR_COUNT = 3
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# time bucket -> EventCategoryStats field
_BUCKET_FIELDS = {
    "meeting": "meeting_time",
    "focus": "focus_time",
    "learning": "learning_time",
    "admin": "admin_time",
}


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def filter_events_by_date_range(
    events: Iterable[Event], start_date: date, end_date: date
) -> List[Event]:
    """
    Keep events starting on or after start_date and before the day after
    end_date. Events without a start are always dropped.
    """
    window_start = _day_start(start_date)
    window_end = _day_start(end_date + timedelta(days=1))
    return [
        event
        for event in events
        if event.start is not None and window_start <= event.start < window_end
    ]


def sort_events_by_start(events: Iterable[Event]) -> List[Event]:
    """Stable sort by start; events without a start go last."""
    return sorted(
        events, key=lambda e: (e.start is None, e.start or _EARLIEST)
    )


def is_all_day_event(event: Event) -> bool:
    """
    True for events explicitly marked all-day, and for events whose span is
    a positive whole number of days (sources that export all-day events as
    24h timed spans).
    """
    if event.is_all_day:
        return True
    duration = event.duration()
    return (
        duration is not None
        and duration > timedelta(0)
        and duration % DAY == timedelta(0)
    )


def all_day_span_days(event: Event) -> int:
    """Whole days covered by an all-day event, never less than one."""
    duration = event.duration()
    if duration is None:
        return 1
    days = duration // DAY
    return days if days > 0 else 1


def timed_duration(event: Event) -> timedelta:
    """Positive duration of a timed event; zero for anything else."""
    if is_all_day_event(event):
        return timedelta(0)
    duration = event.duration()
    if duration is None or duration <= timedelta(0):
        return timedelta(0)
    return duration


def raw_duration(event: Event) -> timedelta:
    """end - start with no sign check; zero when either side is absent."""
    duration = event.duration()
    return duration if duration is not None else timedelta(0)


def calculate_total_duration(events: Iterable[Event]) -> timedelta:
    return sum((timed_duration(event) for event in events), timedelta(0))


def group_events_by_title(events: Iterable[Event]) -> Dict[str, List[Event]]:
    """Group by trimmed summary, skipping events with an empty title."""
    grouped: Dict[str, List[Event]] = defaultdict(list)
    for event in events:
        title = event.summary.strip()
        if title:
            grouped[title].append(event)
    return dict(grouped)


def calculate_title_stats(
    grouped_events: Dict[str, List[Event]],
) -> List[TitleStats]:
    """Per-title count and timed duration, ordered by title."""
    return [
        TitleStats(
            title=title,
            count=len(grouped_events[title]),
            duration=calculate_total_duration(grouped_events[title]),
        )
        for title in sorted(grouped_events)
    ]


def calculate_all_day_stats(
    grouped_events: Dict[str, List[Event]],
) -> List[TitleStats]:
    """
    Per-title count of all-day members and their total day span, ordered by
    title. Titles without any all-day member are omitted.
    """
    stats = []
    for title in sorted(grouped_events):
        all_day_events = [
            event for event in grouped_events[title] if is_all_day_event(event)
        ]
        if not all_day_events:
            continue
        total_days = sum(all_day_span_days(event) for event in all_day_events)
        stats.append(
            TitleStats(
                title=title,
                count=len(all_day_events),
                duration=total_days * DAY,
            )
        )
    return stats


def analyze_category_stats(
    events: Iterable[Event], classifier: EventClassifierRepository
) -> EventCategoryStats:
    """
    Bucket timed events by category and by time bucket.

    Durations here are raw end - start; unlike the per-title figures,
    zero and negative spans are included.
    """
    categories: Dict[str, CategoryInfo] = {}
    bucket_totals = {field: timedelta(0) for field in _BUCKET_FIELDS.values()}

    for event in events:
        if is_all_day_event(event):
            continue

        duration = raw_duration(event)
        title = event.summary.lower()

        category = classifier.categorize_event(title)
        info = categories.setdefault(category, CategoryInfo())
        info.count += 1
        info.duration += duration
        info.events.append(event)

        bucket = classifier.categorize_time_bucket(title)
        if bucket in _BUCKET_FIELDS:
            bucket_totals[_BUCKET_FIELDS[bucket]] += duration

    logger.debug(
        "Computed category statistics",
        extra={"category_count": len(categories)},
    )
    return EventCategoryStats(categories=categories, **bucket_totals)


def select_peak_hours(
    hourly_distribution: Dict[int, timedelta], limit: int = PEAK_HOUR_COUNT
) -> List[int]:
    """Hours with the most accumulated time; ties go to the earlier hour."""
    ranked = sorted(
        hourly_distribution.items(), key=lambda item: (-item[1], item[0])
    )
    return [hour for hour, _ in ranked[:limit]]


def analyze_working_hours(events: Iterable[Event]) -> WorkingHoursStats:
    """Accumulate timed event duration by start hour and start weekday."""
    hourly: Dict[int, timedelta] = defaultdict(timedelta)
    daily: Dict[str, timedelta] = defaultdict(timedelta)
    total = timedelta(0)

    for event in events:
        if event.start is None or is_all_day_event(event):
            continue
        duration = raw_duration(event)
        hourly[event.start.hour] += duration
        daily[WEEKDAY_NAMES[event.start.weekday()]] += duration
        total += duration

    return WorkingHoursStats(
        hourly_distribution=dict(hourly),
        daily_distribution=dict(daily),
        peak_hours=select_peak_hours(hourly),
        total_working_hours=total,
    )


def rank_by_count(stats: Sequence[TitleStats]) -> List[TitleStats]:
    return sorted(stats, key=lambda s: (-s.count, s.title))


def rank_by_duration(stats: Sequence[TitleStats]) -> List[TitleStats]:
    return sorted(stats, key=lambda s: (-s.duration, s.title))


def rank_by_total_days(stats: Sequence[TitleStats]) -> List[TitleStats]:
    return sorted(stats, key=lambda s: (-s.total_days, s.title))
