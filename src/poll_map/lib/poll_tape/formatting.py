"""Human-readable dates for poll tapes.

Tape dates are OCR'd or hand-entered, so anything that does not parse
renders as ``DATE_UNAVAILABLE`` instead of raising.
"""

from datetime import datetime

from dateutil.parser import ParserError
from dateutil.parser import parse as parse_date
from loguru import logger

DATE_UNAVAILABLE = "Date unavailable"


def _parse(value: str | None) -> datetime | None:
    if not value or not value.strip():
        return None
    try:
        return parse_date(value)
    except (ParserError, ValueError, OverflowError) as exc:
        logger.debug("Unparseable tape date {!r}: {}", value, exc)
        return None


def format_long_date(value: str | None) -> str:
    """Format as ``November 5, 2024``."""
    parsed = _parse(value)
    if parsed is None:
        return DATE_UNAVAILABLE
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_timestamp(value: str | None) -> str:
    """Format as ``Nov 5, 2024, 7:00:00 AM``."""
    parsed = _parse(value)
    if parsed is None:
        return DATE_UNAVAILABLE
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{parsed:%b} {parsed.day}, {parsed.year}, {hour}:{parsed:%M:%S} {meridiem}"
