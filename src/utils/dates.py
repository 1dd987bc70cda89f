"""
Date and time helpers: parsing, leap years, timespans, and clock angles.

**Conceptual**: Every function here is a pure transformation of point-in-time
values. Parsed results are always timezone-aware pandas Timestamps in UTC, so
two strings that name the same instant with different offset notations
compare equal. Naive inputs (no offset) are interpreted in the configured
default timezone (see src.config.settings) before conversion to UTC.

**Public functions**:
  - parse_rfc2822(): 'Tue, 26 Jan 2016 13:48:02 GMT' -> Timestamp
  - parse_iso8601(): '2016-01-19T16:07:37+00:00' -> Timestamp
  - is_leap_year(): Gregorian leap-year rule on the year component
  - format_timespan(): two instants -> "HH:mm:ss.sss"
  - parse_timespan(): "HH:mm:ss.sss" -> milliseconds (inverse of the above)
  - angle_between_hands(): radians between the hour and minute hands (UTC)

**Errors**: malformed strings raise DateParseError, negative spans raise
NegativeTimespanError. Both subclass ValueError.
"""

import re
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import numpy as np
import pandas as pd
from loguru import logger

from src.config.settings import Settings, get_settings


MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

# "GMT+01", "UTC-05:30", "GMT +0100": rewritten to a numeric offset ("+0100").
# The sign reads like a numeric offset, so GMT+01 is one hour ahead of UTC.
_NAMED_OFFSET_RE = re.compile(
    r"\b(?:GMT|UTC|UT)\s*([+-])(\d{1,2})(?::?(\d{2}))?\b",
    re.IGNORECASE,
)

# Month-name-first dates without a time, such as "December 17, 1995".
# email.utils already accepts these forms when a time is present.
_LENIENT_RFC2822_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
)

_TIMESPAN_RE = re.compile(r"(\d{2,}):([0-5]\d):([0-5]\d)\.(\d{3})")


class DateParseError(ValueError):
    """
    Raised when a string does not conform to the expected date/time grammar.

    The message quotes the offending value and names the expected format, so
    callers can surface it directly to the user.
    """
    pass


class NegativeTimespanError(ValueError):
    """Raised when a timespan would end before it starts."""
    pass


def _to_utc(value: Any, settings: Optional[Settings] = None) -> pd.Timestamp:
    """
    Convert a point-in-time value to a timezone-aware UTC Timestamp.

    Naive values are localized to settings.default_timezone first.
    """
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Expected a point in time, got: {value!r}")

    if ts.tzinfo is None:
        tz = (settings or get_settings()).default_timezone
        logger.debug("Interpreting naive value {} in default timezone {}", ts, tz)
        ts = ts.tz_localize(tz)

    return ts.tz_convert("UTC")


def _normalize_named_offset(match: re.Match) -> str:
    sign, hours, minutes = match.groups()
    return f"{sign}{int(hours):02d}{minutes or '00'}"


def parse_rfc2822(value: str, settings: Optional[Settings] = None) -> pd.Timestamp:
    """
    Parse an RFC 2822 date string into a UTC Timestamp.

    **Accepted forms**:
      - 'Tue, 26 Jan 2016 13:48:02 GMT' (day name optional, obsolete zone names allowed)
      - 'Tue, 26 Jan 2016 13:48:02 +0100'
      - 'Sun, 17 May 1998 03:00:00 GMT+01' (equivalent to +0100)
      - 'December 17, 1995 03:24:00' (month name first, no zone)
      - 'December 17, 1995' (date only, midnight in the default timezone)

    A string without a zone (or with the RFC's "-0000" unknown-zone marker) is
    interpreted in the default timezone.

    Args:
        value: The date string.
        settings: Settings for the default timezone. Defaults to get_settings().

    Returns:
        Timezone-aware Timestamp in UTC.

    Raises:
        TypeError: If value is not a string.
        DateParseError: If value matches none of the accepted forms.

    Example:
        >>> parse_rfc2822('Sun, 17 May 1998 03:00:00 GMT+01')
        Timestamp('1998-05-17 02:00:00+0000', tz='UTC')
    """
    if not isinstance(value, str):
        raise TypeError(f"RFC 2822 date must be a string, got {type(value).__name__}")

    text = _NAMED_OFFSET_RE.sub(_normalize_named_offset, value.strip())

    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, OverflowError):
        parsed = None

    if parsed is None:
        for fmt in _LENIENT_RFC2822_FORMATS:
            try:
                parsed = pd.to_datetime(text, format=fmt)
            except ValueError:
                continue
            logger.debug("Parsed {!r} with lenient format {!r}", value, fmt)
            break

    if parsed is None or pd.isna(parsed):
        raise DateParseError(
            f"Invalid RFC 2822 date: {value!r}. "
            f"Expected e.g. 'Tue, 26 Jan 2016 13:48:02 GMT'."
        )

    return _to_utc(parsed, settings)


def parse_iso8601(value: str, settings: Optional[Settings] = None) -> pd.Timestamp:
    """
    Parse an ISO 8601 date or date-time string into a UTC Timestamp.

    Accepts '2016-01-19T16:07:37+00:00', '2016-01-19T08:07:37Z',
    '2016-01-19 08:07:37.123' and '2016-01-19'. A missing offset means the
    default timezone.

    The supported year range is that of the installed pandas: pandas 2.x
    rejects dates outside 1677-2262 (reported as DateParseError), newer
    releases accept them.

    Raises:
        TypeError: If value is not a string.
        DateParseError: If value is not valid ISO 8601.
    """
    if not isinstance(value, str):
        raise TypeError(f"ISO 8601 date must be a string, got {type(value).__name__}")

    try:
        # format='ISO8601' accepts both the 'T' and the space separator
        parsed = pd.to_datetime(value.strip(), format="ISO8601")
    except ValueError as e:
        raise DateParseError(
            f"Invalid ISO 8601 date: {value!r}. "
            f"Expected e.g. '2016-01-19T16:07:37+00:00'."
        ) from e

    # Empty strings and "NaT" spellings come back as NaT instead of raising
    if pd.isna(parsed):
        raise DateParseError(
            f"Invalid ISO 8601 date: {value!r}. "
            f"Expected e.g. '2016-01-19T16:07:37+00:00'."
        )

    return _to_utc(parsed, settings)


def is_leap_year(date: Any) -> bool:
    """
    Return True if the year of `date` is a Gregorian leap year.

    A year is a leap year if it is divisible by 4, except century years,
    which must also be divisible by 400:
        1900 -> False, 2000 -> True, 2001 -> False, 2012 -> True.

    Args:
        date: Any value with a `year` attribute (date, datetime, Timestamp).
    """
    year = date.year
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def format_timespan(start: Any, end: Any, settings: Optional[Settings] = None) -> str:
    """
    Render the span between two instants as "HH:mm:ss.sss".

    **Functionally**:
    - The span is end - start, truncated to whole milliseconds.
    - Hours are zero-padded to two digits and widen past 99
      (e.g. "123:00:00.000"); minutes and seconds to two digits;
      milliseconds to three.
    - Naive inputs are interpreted in the default timezone, so a naive and
      an aware value can be mixed.

    Args:
        start: Beginning of the span.
        end: End of the span; must not be before start.
        settings: Settings for the default timezone. Defaults to get_settings().

    Returns:
        The formatted span.

    Raises:
        NegativeTimespanError: If end is before start.

    Example:
        >>> format_timespan(datetime(2000, 1, 1, 10), datetime(2000, 1, 1, 15, 20, 10, 453000))
        '05:20:10.453'
    """
    start_ts = _to_utc(start, settings)
    end_ts = _to_utc(end, settings)

    span = end_ts - start_ts
    if span < pd.Timedelta(0):
        raise NegativeTimespanError(
            f"Timespan end ({end_ts}) is before its start ({start_ts})"
        )

    total_ms = span // pd.Timedelta(milliseconds=1)

    hours, rest = divmod(total_ms, MS_PER_HOUR)
    minutes, rest = divmod(rest, MS_PER_MINUTE)
    seconds, millis = divmod(rest, MS_PER_SECOND)

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def parse_timespan(value: str) -> int:
    """
    Parse an "HH:mm:ss.sss" string (as produced by format_timespan) into milliseconds.

    Raises:
        TypeError: If value is not a string.
        DateParseError: If value is not in the expected format.
    """
    if not isinstance(value, str):
        raise TypeError(f"Timespan must be a string, got {type(value).__name__}")

    match = _TIMESPAN_RE.fullmatch(value.strip())
    if match is None:
        raise DateParseError(
            f"Invalid timespan: {value!r}. Expected 'HH:mm:ss.sss', e.g. '05:20:10.453'."
        )

    hours, minutes, seconds, millis = (int(part) for part in match.groups())
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + millis


def angle_between_hands(date: Any, settings: Optional[Settings] = None) -> float:
    """
    Return the angle in radians between the hour and minute hands of an analog
    clock showing the UTC time of `date`.

    **Mathematical**: The minute hand moves 6 degrees per minute. The hour hand
    moves 0.5 degrees per minute since 12 o'clock. For hour h (0-11) and
    minute m:
        angle = |(60h + m) / 2 - 6m|
    and the shorter of angle and 360 - angle is kept, so the result is
    always in [0, pi]. Seconds are ignored.

    Example:
        >>> angle_between_hands(datetime(2016, 4, 5, 3, 0, tzinfo=timezone.utc))
        1.5707963267948966
    """
    ts = _to_utc(date, settings)
    hour, minute = ts.hour, ts.minute

    if hour >= 12:
        hour -= 12

    angle = abs((hour * 60 + minute) / 2 - 6 * minute)
    if angle > 180:
        angle = 360 - angle

    return float(angle * np.pi / 180)
