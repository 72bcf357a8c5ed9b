"""Date and time functions: the current date or time, and reformatting of dates.

Output layouts use reference-time notation: ``2006`` is the year, ``01`` the
month, ``02`` the day, ``15`` the hour, ``04`` the minute, ``05`` the second
and ``-07:00`` the zone offset.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from .coerce import CoercionError, to_string

_logger = logging.getLogger(__name__)

LOCATION_ENV = "FLOWKIT_DATETIME_LOCATION"
DEFAULT_LOCATION = "UTC"
DATE_FORMAT_DEFAULT = "2006-01-02-07:00"
DATETIME_FORMAT_DEFAULT = "2006-01-02T15:04:05-07:00"
TIME_FORMAT_DEFAULT = "15:04:05-07:00"

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_OFFSET_FORMS = ("070000", "07:00:00", "0700", "07:00", "07")


def get_location() -> str:
    """Return the time zone name from the environment, or ``UTC``."""
    location = os.environ.get(LOCATION_ENV, "")
    return location or DEFAULT_LOCATION


def _load_zone(name: str) -> tzinfo:
    if name == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ValueError(f"unknown time zone {name}") from exc


def _current_moment() -> datetime:
    location = get_location()
    try:
        zone = _load_zone(location)
    except ValueError as exc:
        _logger.error("Load location %s error %s", location, exc)
        zone = timezone.utc
    return datetime.now(zone)


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _offset_text(moment: datetime, form: str, zulu: bool) -> str:
    offset = moment.utcoffset() or timedelta(0)
    seconds = int(offset.total_seconds())
    if zulu and seconds == 0:
        return "Z"
    sign = "-" if seconds < 0 else "+"
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if form == "07":
        return f"{sign}{hours:02d}"
    if form == "0700":
        return f"{sign}{hours:02d}{minutes:02d}"
    if form == "07:00":
        return f"{sign}{hours:02d}:{minutes:02d}"
    if form == "070000":
        return f"{sign}{hours:02d}{minutes:02d}{secs:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"


def _zone_name(moment: datetime) -> str:
    name = moment.tzname()
    if name:
        return name
    return _offset_text(moment, "0700", zulu=False)


_FIELDS: dict[str, Callable[[datetime], str]] = {
    "January": lambda t: _MONTHS[t.month - 1],
    "Jan": lambda t: _MONTHS[t.month - 1][:3],
    "Monday": lambda t: _WEEKDAYS[t.weekday()],
    "Mon": lambda t: _WEEKDAYS[t.weekday()][:3],
    "MST": _zone_name,
    "1": lambda t: str(t.month),
    "01": lambda t: f"{t.month:02d}",
    "2": lambda t: str(t.day),
    "_2": lambda t: f"{t.day:2d}",
    "02": lambda t: f"{t.day:02d}",
    "__2": lambda t: f"{t.timetuple().tm_yday:3d}",
    "002": lambda t: f"{t.timetuple().tm_yday:03d}",
    "15": lambda t: f"{t.hour:02d}",
    "3": lambda t: str(_hour12(t)),
    "03": lambda t: f"{_hour12(t):02d}",
    "4": lambda t: str(t.minute),
    "04": lambda t: f"{t.minute:02d}",
    "5": lambda t: str(t.second),
    "05": lambda t: f"{t.second:02d}",
    "2006": lambda t: f"{t.year:04d}",
    "06": lambda t: f"{t.year % 100:02d}",
    "PM": lambda t: "PM" if t.hour >= 12 else "AM",
    "pm": lambda t: "pm" if t.hour >= 12 else "am",
}


def _std_width(layout: str, i: int) -> int:
    """Return the length of the layout element starting at ``i``, or 0 for a literal."""
    rest = layout[i:]
    first = rest[0]
    if first == "J":
        if rest.startswith("January"):
            return 7
        if rest.startswith("Jan"):
            return 3
    elif first == "M":
        if rest.startswith("Monday"):
            return 6
        if rest.startswith(("Mon", "MST")):
            return 3
    elif first == "0":
        if len(rest) >= 2 and "1" <= rest[1] <= "6":
            return 2
        if rest.startswith("002"):
            return 3
    elif first == "1":
        return 2 if rest.startswith("15") else 1
    elif first == "2":
        return 4 if rest.startswith("2006") else 1
    elif first == "_":
        if rest.startswith("_2"):
            return 0 if rest.startswith("_2006") else 2
        if rest.startswith("__2"):
            return 3
    elif first in "345":
        return 1
    elif first == "P":
        return 2 if rest.startswith("PM") else 0
    elif first == "p":
        return 2 if rest.startswith("pm") else 0
    elif first in "-Z":
        for form in _OFFSET_FORMS:
            if rest.startswith(form, 1):
                return 1 + len(form)
    elif first in ".,":
        if len(rest) >= 2 and rest[1] in "09":
            end = 1
            while end < len(rest) and rest[end] == rest[1]:
                end += 1
            if not (end < len(rest) and rest[end].isdigit()):
                return end
    return 0


def _chunks(layout: str) -> Iterator[tuple[str, bool]]:
    literal_start = 0
    i = 0
    while i < len(layout):
        width = _std_width(layout, i)
        if not width:
            i += 1
            continue
        if literal_start < i:
            yield layout[literal_start:i], False
        yield layout[i:i + width], True
        i += width
        literal_start = i
    if literal_start < len(layout):
        yield layout[literal_start:], False


def _fraction(moment: datetime, token: str) -> str:
    digits = len(token) - 1
    nanos = f"{moment.microsecond * 1000:09d}".ljust(digits, "0")[:digits]
    if token[1] == "9":
        nanos = nanos.rstrip("0")
        if not nanos:
            return ""
    return token[0] + nanos


def _render(moment: datetime, token: str) -> str:
    field = _FIELDS.get(token)
    if field is not None:
        return field(moment)
    if token[0] in "-Z":
        return _offset_text(moment, token[1:], zulu=token[0] == "Z")
    return _fraction(moment, token)


def _format_layout(moment: datetime, layout: str) -> str:
    return "".join(
        _render(moment, text) if is_std else text for text, is_std in _chunks(layout)
    )


def current_date() -> str:
    """Return today's date with its zone offset, in the configured location."""
    _logger.debug("Returns the current date with timezone")
    return _format_layout(_current_moment(), DATE_FORMAT_DEFAULT)


def current_datetime() -> str:
    """Return the current date and time with zone offset, in the configured location."""
    _logger.debug("Returns the current datetime with timezone")
    return _format_layout(_current_moment(), DATETIME_FORMAT_DEFAULT)


def current_time() -> str:
    """Return the current time with zone offset, in the configured location."""
    _logger.debug("Returns the current time with timezone")
    return _format_layout(_current_moment(), TIME_FORMAT_DEFAULT)


def now() -> str:
    """Return the current date and time with zone offset, in the configured location."""
    return current_datetime()


def _argument(value: Any, label: str, position: str) -> str:
    try:
        return to_string(value)
    except CoercionError:
        raise ValueError(f"Format {label} {position} argument must be string") from None


def _parse_us(text: str) -> datetime:
    return date_parser.parse(text, dayfirst=False, yearfirst=False)


def _parse_general(text: str) -> datetime:
    try:
        return date_parser.isoparse(text)
    except (ValueError, OverflowError):
        return date_parser.parse(text)


def _parse(text: str, label: str, *, month_first: bool) -> datetime:
    location = get_location()
    try:
        zone = _load_zone(location)
    except ValueError as exc:
        _logger.error("New %s parser %s error %s", label, text, exc)
        raise
    attempts = (_parse_us, _parse_general) if month_first else (_parse_general,)
    error: Exception | None = None
    for attempt in attempts:
        try:
            parsed = attempt(text)
        except (ValueError, OverflowError) as exc:
            error = exc
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=zone)
        return parsed
    _logger.error("Parsing %s %s error %s", label, text, error)
    raise ValueError(f"unable to parse {label} {text!r}: {error}") from error


def _convert_date_format(fmt: str) -> str:
    return fmt.lower().replace("yyyy", "2006").replace("mm", "01").replace("dd", "02")


def _convert_datetime_format(fmt: str) -> str:
    for old, new in (
        ("yyyy", "2006"), ("YYYY", "2006"),
        ("MM", "01"),
        ("dd", "02"), ("DD", "02"),
        ("hh", "15"), ("HH", "15"),
        ("mm", "04"),
        ("ss", "05"), ("SS", "05"),
    ):
        fmt = fmt.replace(old, new)
    return fmt


def _convert_time_format(fmt: str) -> str:
    return fmt.lower().replace("hh", "15").replace("mm", "04").replace("ss", "05")


def format_date(date: Any, fmt: Any) -> str:
    """Reformat a date, reading ``MM/DD/YYYY`` month first; ``yyyy``, ``mm``, ``dd`` are allowed."""
    text = _argument(date, "date", "first")
    layout = _convert_date_format(_argument(fmt, "date", "second"))
    _logger.debug("Format date %s to format %s", text, layout)
    return _format_layout(_parse(text, "date", month_first=True), layout)


def format_datetime(date: Any, fmt: Any) -> str:
    """Reformat a date and time; ``yyyy``, ``MM``, ``dd``, ``hh``, ``mm``, ``ss`` are allowed."""
    text = _argument(date, "datetime", "first")
    layout = _argument(fmt, "datetime", "second")
    _logger.debug("Format datetime %s to format %s", text, layout)
    return _format_layout(
        _parse(text, "datetime", month_first=False), _convert_datetime_format(layout)
    )


def format_time(value: Any, fmt: Any) -> str:
    """Reformat a time; ``hh``, ``mm`` and ``ss`` are allowed in any case."""
    text = _argument(value, "time", "first")
    layout = _argument(fmt, "time", "second")
    _logger.debug("Format time %s to format %s", text, layout)
    return _format_layout(_parse(text, "time", month_first=False), _convert_time_format(layout))