"""
Line-oriented reader for the VEVENT subset of iCalendar files.

Only UID, SUMMARY, DTSTART, DTEND and CREATED are modelled. Everything
outside a BEGIN:VEVENT / END:VEVENT pair is ignored.
"""

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .domain import Event

logger = logging.getLogger(__name__)

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

UTC_FORMAT = "%Y%m%dT%H%M%SZ"
LOCAL_FORMAT = "%Y%m%dT%H%M%S"
DATE_FORMAT = "%Y%m%d"

_UTC_PATTERN = re.compile(r"\d{8}T\d{6}Z")
_LOCAL_PATTERN = re.compile(r"\d{8}T\d{6}")
_DATE_PATTERN = re.compile(r"\d{8}")


class DateTimeDecodeError(ValueError):
    """Raised when a date/time token cannot be decoded."""

    pass


class EmptyValueError(DateTimeDecodeError):
    """The token was empty."""

    pass


class UnsupportedFormatError(DateTimeDecodeError):
    """The token matches none of the supported shapes."""

    pass


class InvalidValueError(DateTimeDecodeError):
    """The token has a supported shape but is not a valid date/time."""

    pass


def decode_datetime(token: str) -> datetime:
    """
    Decode a DTSTART/DTEND/CREATED value into a UTC datetime.

    Shapes are tried in order: ``YYYYMMDDTHHMMSSZ`` (UTC),
    ``YYYYMMDDTHHMMSS`` (floating, wall clock kept as-is) and
    ``YYYYMMDD`` (date at midnight). Floating and date-only values are
    tagged UTC without applying any offset.

    Raises:
        EmptyValueError: If token is empty.
        UnsupportedFormatError: If token matches no supported shape.
        InvalidValueError: If the digits do not form a valid date/time.
    """
    if not token:
        raise EmptyValueError("empty datetime string")

    if len(token) >= 15 and token.endswith("Z"):
        pattern, fmt = _UTC_PATTERN, UTC_FORMAT
    elif len(token) >= 15 and "T" in token:
        pattern, fmt = _LOCAL_PATTERN, LOCAL_FORMAT
    elif len(token) == 8:
        pattern, fmt = _DATE_PATTERN, DATE_FORMAT
    else:
        raise UnsupportedFormatError(
            f"unsupported datetime format: '{token}' (length: {len(token)})"
        )

    if not pattern.fullmatch(token):
        raise InvalidValueError(f"malformed datetime value: '{token}'")
    try:
        parsed = datetime.strptime(token, fmt)
    except ValueError as e:
        raise InvalidValueError(
            f"invalid datetime value '{token}': {e}"
        ) from e
    return parsed.replace(tzinfo=timezone.utc)


def extract_value(line: str) -> str:
    """
    Return the text after the last colon of a property line.

    Handles ``DTSTART:20240102T090000Z``, ``DTSTART;TZID=Asia/Tokyo:...``
    and ``DTSTART;VALUE=DATE:20240103`` alike.
    """
    colon_index = line.rfind(":")
    if colon_index == -1:
        logger.warning(f"Could not extract datetime from line: {line}")
        return ""
    return line[colon_index + 1 :]


def has_date_value_param(line: str) -> bool:
    """True when the property parameters include VALUE=DATE."""
    colon_index = line.rfind(":")
    head = line if colon_index == -1 else line[:colon_index]
    return "VALUE=DATE" in head.split(";")[1:]


class ParserState(str, Enum):
    """States of the VEVENT block scanner."""

    OUTSIDE = "outside"
    IN_EVENT = "in_event"


class EventBuilder:
    """
    Mutable accumulator for one VEVENT block. Only build() produces an
    Event; a builder that never sees END:VEVENT is simply discarded.
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}

    def apply(self, line: str) -> None:
        """Update the accumulated fields from one property line."""
        if line.startswith("UID:"):
            self._fields["uid"] = line[len("UID:") :]
        elif line.startswith("SUMMARY:"):
            self._fields["summary"] = line[len("SUMMARY:") :]
        elif line.startswith("DTSTART"):
            if has_date_value_param(line):
                self._fields["is_all_day"] = True
            self._set_timestamp("start", line, extract_value(line))
        elif line.startswith("DTEND"):
            self._set_timestamp("end", line, extract_value(line))
        elif line.startswith("CREATED:"):
            self._set_timestamp("created", line, line[len("CREATED:") :])

    def build(self) -> Event:
        return Event(**self._fields)

    def _set_timestamp(self, field: str, line: str, token: str) -> None:
        try:
            self._fields[field] = decode_datetime(token)
        except DateTimeDecodeError as e:
            logger.warning(
                f"Failed to parse {field} from '{line}': {e}",
                extra={"field": field, "token": token},
            )


def parse_ics_lines(
    lines: Iterable[str], source: Optional[str] = None
) -> List[Event]:
    """
    Scan lines and return one Event per complete VEVENT block, in order.

    A block still open when the input ends is dropped. A BEGIN:VEVENT
    inside an open block starts a fresh block.
    """
    events: List[Event] = []
    state = ParserState.OUTSIDE
    builder = EventBuilder()

    for raw_line in lines:
        line = raw_line.strip()

        if line == BEGIN_EVENT:
            state = ParserState.IN_EVENT
            builder = EventBuilder()
        elif state is ParserState.OUTSIDE:
            continue
        elif line == END_EVENT:
            events.append(builder.build())
            state = ParserState.OUTSIDE
        else:
            builder.apply(line)

    if state is ParserState.IN_EVENT:
        logger.debug(
            "Dropping unterminated VEVENT block",
            extra={"source": source},
        )

    return events


def parse_ics_file(file_path: Union[str, Path]) -> List[Event]:
    """
    Parse one .ics file.

    Bytes that are not valid UTF-8 are replaced with U+FFFD, so a stray
    byte only affects the line it appears on.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return parse_ics_lines(f, source=str(file_path))
