"""
Tests for the local .ics directory walker and the mock repositories.
"""

import os
from pathlib import Path
from typing import List

import pytest

from calstats.domain import FileLoadProblem
from calstats.repos.local.calendar import LocalIcsCalendarRepository
from calstats.repos.mock.calendar import MockCalendarRepository
from calstats.repositories import (
    CalendarDirectoryError,
    CalendarEventRepository,
)
from calstats.tests.factories import minimal_event, vevent, write_ics


class TestLocalIcsCalendarRepository:
    def test_implements_protocol(self) -> None:
        assert isinstance(
            LocalIcsCalendarRepository(), CalendarEventRepository
        )

    def test_walks_recursively_and_concatenates_in_visit_order(
        self, tmp_path: Path
    ) -> None:
        write_ics(tmp_path, "b.ics", vevent(summary="B1"), vevent(summary="B2"))
        write_ics(tmp_path, "a.ics", vevent(summary="A1"))
        write_ics(tmp_path / "nested" / "deeper", "c.ICS", vevent(summary="C"))
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert [e.summary for e in events] == ["A1", "B1", "B2", "C"]
        assert problems == []

    def test_non_matching_files_are_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").write_text(vevent(), encoding="utf-8")
        (tmp_path / "calendar.ics.bak").write_text(vevent(), encoding="utf-8")
        (tmp_path / "folder.ics").mkdir()
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert events == []
        assert problems == []

    def test_duplicate_uids_are_not_deduplicated(self, tmp_path: Path) -> None:
        write_ics(tmp_path, "one.ics", vevent(uid="same"))
        write_ics(tmp_path, "two.ics", vevent(uid="same"))

        events = LocalIcsCalendarRepository().load_events(tmp_path, [])

        assert [e.uid for e in events] == ["same", "same"]

    def test_unreadable_file_is_reported_and_walk_continues(
        self, tmp_path: Path
    ) -> None:
        write_ics(tmp_path, "a.ics", vevent(summary="Before"))
        (tmp_path / "b.ics").symlink_to(tmp_path / "missing-target.ics")
        write_ics(tmp_path, "c.ics", vevent(summary="After"))
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert [e.summary for e in events] == ["Before", "After"]
        assert len(problems) == 1
        assert problems[0].path.endswith("b.ics")
        assert problems[0].error

    def test_invalid_utf8_byte_keeps_file_events(self, tmp_path: Path) -> None:
        (tmp_path / "legacy.ics").write_bytes(
            b"BEGIN:VEVENT\nSUMMARY:Daily Standup\nDESCRIPTION:caf\xe9\n"
            b"DTSTART:20240102T090000Z\nEND:VEVENT\n"
        )
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert [e.summary for e in events] == ["Daily Standup"]
        assert problems == []

    def test_unlistable_directory_is_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_ics(tmp_path, "a.ics", vevent(summary="Visible"))
        write_ics(tmp_path / "locked", "b.ics", vevent(summary="Hidden"))
        real_scandir = os.scandir

        def scandir(path):
            if os.path.basename(os.fspath(path)) == "locked":
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert [e.summary for e in events] == ["Visible"]
        assert len(problems) == 1
        assert problems[0].path.endswith("locked")
        assert "Permission denied" in problems[0].error

    def test_os_error_is_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_ics(tmp_path, "locked.ics", vevent())

        def refuse(path: Path) -> None:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(
            "calstats.repos.local.calendar.parse_ics_file", refuse
        )
        problems: List[FileLoadProblem] = []

        events = LocalIcsCalendarRepository().load_events(tmp_path, problems)

        assert events == []
        assert "Permission denied" in problems[0].error

    def test_validate_directory(self, tmp_path: Path) -> None:
        repo = LocalIcsCalendarRepository()
        repo.validate_directory(tmp_path)

        with pytest.raises(CalendarDirectoryError):
            repo.validate_directory(tmp_path / "missing")

        file_path = tmp_path / "file.ics"
        file_path.write_text("", encoding="utf-8")
        with pytest.raises(CalendarDirectoryError):
            repo.validate_directory(file_path)


class TestMockCalendarRepository:
    def test_returns_configured_events_and_problems(self) -> None:
        event = minimal_event(summary="Only")
        problem = FileLoadProblem(path="bad.ics", error="boom")
        repo = MockCalendarRepository(events=[event], problems=[problem])
        problems: List[FileLoadProblem] = []

        events = repo.load_events(Path("ignored"), problems)

        assert events == [event]
        assert problems == [problem]

    def test_sample_events(self) -> None:
        events = MockCalendarRepository().load_events(Path("ignored"), [])
        assert any(e.is_all_day for e in events)
        assert any(e.summary == "Daily Standup" for e in events)
