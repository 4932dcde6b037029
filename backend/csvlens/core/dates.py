"""
Date and timestamp parsing for profiling and cleaning.

Parsing is an ordered chain of named attempts. Each attempt returns a naive
datetime or None; the chain stops at the first hit. Nothing here raises on
bad input - callers treat None as "leave the value alone".

Timezone-aware results are converted to UTC and made naive, and epoch values
are interpreted in UTC, so output never depends on the host's local zone.
"""
import calendar
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from dateutil import parser as dateutil_parser

from csvlens.core.values import NUMERIC_PATTERN, ValueKind, classify, parse_number

DateParser = Callable[[Any], Optional[datetime]]

# Literal date shapes recognised without a general parser (pattern, strptime format)
LITERAL_DATE_FORMATS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),   # 2023-12-31
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%d/%m/%Y"),   # 31/12/2023
    (re.compile(r"^\d{4}/\d{2}/\d{2}$"), "%Y/%m/%d"),   # 2023/12/31
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%d-%m-%Y"),   # 31-12-2023
]

PURE_DIGITS = re.compile(r"^\d+$")

# DD-MM-YYYY or DD/MM/YYYY, separators may be mixed
DAY_FIRST_DATE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")

# DD-MM-YYYY HH:mm or DD-MM-YYYY HH:mm:ss
DAY_FIRST_TIMESTAMP = re.compile(
    r"^(\d{2})-(\d{2})-(\d{4})\s+(\d{1,2}):(\d{2})(?::(\d{2}))?$"
)

# Numbers above this are read as Unix epochs
EPOCH_THRESHOLD = 1_000_000_000
# Epochs below this are in seconds, above it in milliseconds
MILLISECOND_THRESHOLD = 10_000_000_000

# Two far-apart defaults for the general parser; a calendar date that differs
# between the two parses was not written in the text
GENERAL_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

DATE_TOKENS = re.compile(r"YYYY|MM|DD")
TIMESTAMP_TOKENS = re.compile(r"YYYY|MM|DD|HH|mm|ss")

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"
DEFAULT_TIMESTAMP_FORMAT = "YYYY-MM-DD HH:mm:ss"
NAMED_TIMESTAMP_FORMATS = [
    "YYYY-MM-DD HH:mm:ss",
    "DD/MM/YYYY HH:mm:ss",
    "MM/DD/YYYY HH:mm:ss",
    "YYYY-MM-DD HH:mm",
]
TIMESTAMP_FORMATS = ["unix", "iso"] + NAMED_TIMESTAMP_FORMATS


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _as_text(value: Any) -> Optional[str]:
    if classify(value) != ValueKind.STRING:
        return None
    text = value.strip()
    return text or None


def run_chain(value: Any, parsers: List[Tuple[str, DateParser]]) -> Optional[datetime]:
    """Return the result of the first parser in the chain that succeeds."""
    for _name, attempt in parsers:
        parsed = attempt(value)
        if parsed is not None:
            return parsed
    return None


# ---------------------------------------------------------------- dates


def matches_literal_date_pattern(value: str) -> bool:
    text = value.strip()
    return any(pattern.match(text) for pattern, _fmt in LITERAL_DATE_FORMATS)


def parse_literal_date(value: Any) -> Optional[datetime]:
    """Parse one of the literal date shapes, validating the calendar date."""
    text = _as_text(value)
    if text is None:
        return None

    for pattern, fmt in LITERAL_DATE_FORMATS:
        if pattern.match(text):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                return None
    return None


def parse_general_datetime(value: Any) -> Optional[datetime]:
    """
    Parse free-form date/time text with dateutil.

    Bare numbers and text without a full calendar date ('10:30',
    'March 2023') are rejected instead of being completed from today.
    """
    text = _as_text(value)
    if text is None or NUMERIC_PATTERN.match(text):
        return None

    first_default, second_default = GENERAL_PARSE_DEFAULTS
    try:
        parsed = dateutil_parser.parse(text, default=first_default)
        check = dateutil_parser.parse(text, default=second_default)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.date() != check.date():
        return None
    return _to_naive_utc(parsed)


DATE_PARSERS: List[Tuple[str, DateParser]] = [
    ("literal_pattern", parse_literal_date),
    ("general", parse_general_datetime),
]


def parse_date_like(value: Any) -> Optional[datetime]:
    """Parse a date cell: literal shapes first, then the general parser."""
    return run_chain(value, DATE_PARSERS)


def is_date_like(value: str) -> bool:
    """
    Heuristic check used by date-column detection.

    Pure-digit strings are never dates (they are usually ids or amounts).
    """
    text = value.strip()
    if not text:
        return False
    if PURE_DIGITS.match(text):
        return False
    return matches_literal_date_pattern(text) or parse_general_datetime(text) is not None


def parse_day_first_date(value: Any) -> Optional[date]:
    """Parse strictly DD-MM-YYYY / DD/MM/YYYY."""
    text = _as_text(value)
    if text is None:
        return None

    match = DAY_FIRST_DATE.match(text)
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date(value: date, template: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a date through a template using YYYY, MM and DD tokens."""
    parts = {
        "YYYY": str(value.year),
        "MM": f"{value.month:02d}",
        "DD": f"{value.day:02d}",
    }
    return DATE_TOKENS.sub(lambda m: parts[m.group(0)], template)


# ---------------------------------------------------------------- timestamps


def parse_epoch(value: Any) -> Optional[datetime]:
    """
    Read a Unix epoch in seconds or milliseconds.

    Numeric strings need at least 10 characters to be considered.
    """
    kind = classify(value)
    if kind == ValueKind.STRING and len(value) < 10:
        return None
    if kind not in (ValueKind.NUMBER, ValueKind.STRING):
        return None

    number = parse_number(value)
    if number is None or number <= EPOCH_THRESHOLD:
        return None

    millis = number * 1000 if number < MILLISECOND_THRESHOLD else number
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return None


def parse_day_first_timestamp(value: Any) -> Optional[datetime]:
    """Parse DD-MM-YYYY HH:mm with optional :ss."""
    text = _as_text(value)
    if text is None:
        return None

    match = DAY_FIRST_TIMESTAMP.match(text)
    if not match:
        return None

    day, month, year, hour, minute, second = match.groups()
    try:
        return datetime(int(year), int(month), int(day), int(hour), int(minute), int(second or 0))
    except ValueError:
        return None


TIMESTAMP_PARSERS: List[Tuple[str, DateParser]] = [
    ("epoch", parse_epoch),
    ("day_first", parse_day_first_timestamp),
    ("general", parse_general_datetime),
]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp cell: epoch, then DD-MM-YYYY HH:mm[:ss], then free-form."""
    return run_chain(value, TIMESTAMP_PARSERS)


def format_timestamp(value: datetime, target_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """
    Render a naive UTC datetime in one of the named timestamp formats.

    Unknown format names fall back to 'YYYY-MM-DD HH:mm:ss'.
    """
    if target_format == "unix":
        return str(calendar.timegm(value.timetuple()))
    if target_format == "iso":
        return (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
            f".{value.microsecond // 1000:03d}Z"
        )

    template = target_format if target_format in NAMED_TIMESTAMP_FORMATS else DEFAULT_TIMESTAMP_FORMAT
    parts = {
        "YYYY": str(value.year),
        "MM": f"{value.month:02d}",
        "DD": f"{value.day:02d}",
        "HH": f"{value.hour:02d}",
        "mm": f"{value.minute:02d}",
        "ss": f"{value.second:02d}",
    }
    return TIMESTAMP_TOKENS.sub(lambda m: parts[m.group(0)], template)
