"""
Local filesystem implementation of the CalendarEventRepository protocol.
Reads .ics exports from a directory tree.
"""

import logging
import os
from pathlib import Path
from typing import List

from calstats.domain import Event, FileLoadProblem
from calstats.ics import parse_ics_file
from calstats.repositories import (
    CalendarDirectoryError,
    CalendarEventRepository,
)

logger = logging.getLogger(__name__)

ICS_EXTENSION = ".ics"


class LocalIcsCalendarRepository(CalendarEventRepository):
    """
    Walks a directory recursively and parses every file whose name ends
    in .ics (case-insensitive). Directories and files are visited in
    name order so repeated runs see events in the same order.
    """

    def validate_directory(self, root_dir: Path) -> None:
        root_dir = Path(root_dir)
        if not root_dir.exists():
            raise CalendarDirectoryError(
                f"Calendar directory '{root_dir}' does not exist"
            )
        if not root_dir.is_dir():
            raise CalendarDirectoryError(
                f"Calendar path '{root_dir}' is not a directory"
            )

    def load_events(
        self, root_dir: Path, problems: List[FileLoadProblem]
    ) -> List[Event]:
        all_events: List[Event] = []

        for file_path in self._iter_calendar_files(Path(root_dir), problems):
            logger.info(f"Reading calendar file: {file_path}")
            try:
                events = parse_ics_file(file_path)
            except OSError as e:
                logger.warning(
                    f"Error parsing ICS file {file_path}: {e}. "
                    f"Continuing with other files...",
                    extra={"path": str(file_path)},
                )
                problems.append(
                    FileLoadProblem(path=str(file_path), error=str(e))
                )
                continue

            logger.info(
                f"Successfully parsed {len(events)} events from {file_path}",
                extra={"path": str(file_path), "event_count": len(events)},
            )
            all_events.extend(events)

        logger.info(
            f"Total events parsed from all files: {len(all_events)}",
            extra={
                "event_count": len(all_events),
                "problem_count": len(problems),
            },
        )
        return all_events

    def _iter_calendar_files(
        self, root_dir: Path, problems: List[FileLoadProblem]
    ) -> List[Path]:
        """
        Returns matching files in deterministic walk order. Directories
        that cannot be listed are recorded in problems and skipped.
        """

        def on_walk_error(e: OSError) -> None:
            logger.warning(
                f"Error listing directory {e.filename}: {e}. "
                f"Continuing with other directories...",
                extra={"path": str(e.filename)},
            )
            problems.append(FileLoadProblem(path=str(e.filename), error=str(e)))

        matches: List[Path] = []
        for dirpath, dirnames, filenames in os.walk(
            root_dir, onerror=on_walk_error
        ):
            dirnames.sort()
            for filename in sorted(filenames):
                if filename.lower().endswith(ICS_EXTENSION):
                    matches.append(Path(dirpath) / filename)
        return matches
