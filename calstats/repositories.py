"""
Defines the repository protocols for calendar statistics.
"""

from pathlib import Path
from typing import List, Optional, Protocol, runtime_checkable

from .domain import CategorizationConfig, Event, FileLoadProblem


class MissingCategorizationConfigError(Exception):
    """Raised when no categorization rule set is available."""

    pass


class CalendarDirectoryError(Exception):
    """Raised when the calendar root directory cannot be used."""

    pass


@runtime_checkable
class CalendarEventRepository(Protocol):
    """
    Protocol for a repository that supplies parsed calendar events.
    """

    def validate_directory(self, root_dir: Path) -> None:
        """
        Checks that the root directory can be walked.

        Raises:
            CalendarDirectoryError: If the directory is missing or is not a
                directory.
        """
        ...

    def load_events(
        self, root_dir: Path, problems: List[FileLoadProblem]
    ) -> List[Event]:
        """
        Loads every event beneath root_dir, in visit order.

        Files that cannot be read are recorded in problems and skipped; a
        single bad file never aborts the load.
        """
        ...


@runtime_checkable
class CategorizationConfigRepository(Protocol):
    """
    Protocol for a repository that supplies the keyword rule set.
    """

    def load_config(self) -> CategorizationConfig:
        """
        Loads the rule set.

        Raises:
            MissingCategorizationConfigError: If no rule set is available.
        """
        ...


@runtime_checkable
class EventClassifierRepository(Protocol):
    """
    Protocol for a repository that maps titles to category names.
    """

    def categorize_event(self, title: str) -> str:
        """Returns the category of a calendar event title."""
        ...

    def match_event_rule(self, title: str) -> Optional[str]:
        """Returns the name of the first event rule matching title."""
        ...

    def categorize_time_bucket(self, title: str) -> str:
        """Returns the general category (time bucket) of a title."""
        ...

    def categorize_page(self, title: str) -> str:
        """Returns the category of a Notion page title."""
        ...

    def display_name(self, category: str) -> str:
        """Returns the human-readable name for a category."""
        ...
