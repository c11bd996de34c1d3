"""Parser for lesson time ranges like "08:30 – 09:50"."""

import logging
import re

from ulsu_schedule.models import LessonTimeRange

logger = logging.getLogger(__name__)

# Time parsing constants
RANGE_SEPARATOR = "-"
DASH_VARIANTS = ("–", "—")  # en dash, em dash
TIME_RANGE_PART_COUNT = 2  # Expected parts when splitting time range (start-end)
MINUTES_PER_HOUR = 60

# Pattern: one or two ASCII digits, colon, two ASCII digits
CLOCK_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


def parse_time_range(text: str | None) -> LessonTimeRange | None:
    """
    Parse a lesson time range into minutes since midnight.

    Examples: "08:30 – 09:50", "08:30-09:50"

    Ordering (start <= end) and bounds (0-1439) are not validated.

    Args:
        text: Raw time range from the schedule data

    Returns:
        LessonTimeRange, or None if the text is not a HH:MM-HH:MM range
    """
    if not text:
        return None

    normalized = text
    for dash in DASH_VARIANTS:
        normalized = normalized.replace(dash, RANGE_SEPARATOR)

    parts = normalized.split(RANGE_SEPARATOR)
    if len(parts) < TIME_RANGE_PART_COUNT:
        logger.debug("No range separator in time text: %s", text)
        return None

    start = parse_clock_time(parts[0])
    end = parse_clock_time(parts[1])
    if start is None or end is None:
        logger.warning("Failed to parse time range: %s", text)
        return None

    return LessonTimeRange(start=start, end=end)


def parse_clock_time(text: str) -> int | None:
    """
    Parse a single "HH:MM" value.

    Args:
        text: Clock time, surrounding whitespace allowed

    Returns:
        Minutes since midnight, or None if parsing fails
    """
    match = CLOCK_TIME_PATTERN.match(text.strip())
    if not match:
        return None

    hours, minutes = (int(part) for part in match.groups())
    return hours * MINUTES_PER_HOUR + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM"."""
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"
