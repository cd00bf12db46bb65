"""
Mock calendar repository with realistic sample events for demonstration.
"""

import logging
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import List, Optional

from calstats.domain import Event, FileLoadProblem
from calstats.repositories import CalendarEventRepository

logger = logging.getLogger(__name__)


class MockCalendarRepository(CalendarEventRepository):
    """
    In-memory calendar repository. Ignores the root directory and returns
    the events (and simulated problems) it was constructed with.
    """

    def __init__(
        self,
        events: Optional[List[Event]] = None,
        problems: Optional[List[FileLoadProblem]] = None,
    ):
        self._events = (
            list(events) if events is not None else self._create_sample_events()
        )
        self._problems = list(problems or [])

    def _create_sample_events(self) -> List[Event]:
        """Create a realistic week of sample calendar events."""
        monday = datetime(2024, 7, 22, 9, 0, tzinfo=timezone.utc)

        events = []
        for day in range(5):
            start = monday + timedelta(days=day)
            events.append(
                Event(
                    uid=f"standup-{day:03d}",
                    summary="Daily Standup",
                    start=start,
                    end=start + timedelta(minutes=15),
                    created=monday - timedelta(days=30),
                )
            )
            events.append(
                Event(
                    uid=f"focus-{day:03d}",
                    summary="Focus Block",
                    start=start + timedelta(hours=1),
                    end=start + timedelta(hours=3),
                )
            )

        events.append(
            Event(
                uid="1on1-001",
                summary="1on1 with Manager",
                start=monday + timedelta(days=2, hours=5),
                end=monday + timedelta(days=2, hours=5, minutes=30),
            )
        )
        events.append(
            Event(
                uid="holiday-001",
                summary="Company Holiday",
                start=monday.replace(hour=0) + timedelta(days=4),
                end=monday.replace(hour=0) + timedelta(days=5),
                is_all_day=True,
            )
        )
        return events

    def validate_directory(self, root_dir: Path) -> None:
        logger.debug(f"Mock repository accepts any directory: {root_dir}")

    def load_events(
        self, root_dir: Path, problems: List[FileLoadProblem]
    ) -> List[Event]:
        problems.extend(self._problems)
        logger.debug(f"Returning {len(self._events)} mock events")
        return list(self._events)
