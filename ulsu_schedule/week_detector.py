"""
Academic week type detection.

Rules of the university calendar:
    - September 1 always falls in week "1".
    - Weeks alternate 1 -> 2 -> 1 -> 2 ... without reset between semesters.
    - Each academic week runs Monday to Sunday.

The week of a date is counted from the Monday on or before September 1 of
its academic year (the reference Monday). Even week index -> "1", odd -> "2".

All functions take the date explicitly; none of them read the clock.
"""

from datetime import date, datetime, timedelta

from ulsu_schedule.date_utils import day_ordinal_from_sunday_index
from ulsu_schedule.models import WeekLabel

ACADEMIC_YEAR_START_MONTH = 9  # September
ACADEMIC_YEAR_START_DAY = 1
DAYS_PER_WEEK = 7


def _as_date(day: date) -> date:
    # datetime is a subclass of date; drop the time of day
    if isinstance(day, datetime):
        return day.date()
    return day


def academic_year_anchor(day: date) -> date:
    """Return September 1 of the academic year containing ``day``."""
    day = _as_date(day)
    year = day.year if day.month >= ACADEMIC_YEAR_START_MONTH else day.year - 1
    return date(year, ACADEMIC_YEAR_START_MONTH, ACADEMIC_YEAR_START_DAY)


def _monday_on_or_before(day: date) -> date:
    return day - timedelta(days=day.weekday())


def reference_monday(day: date) -> date:
    """
    Return the Monday that starts week "1" of the academic year of ``day``.

    This is the Monday on or before the academic year anchor. Late-August
    days already in the week of the next September 1 count from the next
    reference Monday, so that whole week stays week "1".
    """
    day = _as_date(day)
    anchor = academic_year_anchor(day)
    next_monday = _monday_on_or_before(anchor.replace(year=anchor.year + 1))
    # Differs from a plain month-based anchor only in 53-week years:
    # 2020-08-31 is week "1" here, week "2" when counted from 2019-08-26
    if day >= next_monday:
        return next_monday
    return _monday_on_or_before(anchor)


def week_index(day: date) -> int:
    """Return the number of whole weeks between the reference Monday and ``day``."""
    day = _as_date(day)
    diff_days = (day - reference_monday(day)).days
    return diff_days // DAYS_PER_WEEK


def resolve_week_label(day: date) -> WeekLabel:
    """
    Resolve which weekly schedule is in effect on ``day``.

    Args:
        day: Calendar date (a datetime is truncated to its date)

    Returns:
        WeekLabel.FIRST for even week indexes, WeekLabel.SECOND for odd ones
    """
    if week_index(day) % 2 == 0:
        return WeekLabel.FIRST
    return WeekLabel.SECOND


def resolve_day_ordinal(day: date) -> int:
    """Return the Monday-first day ordinal of ``day`` (Monday = 0, Sunday = 6)."""
    sunday_index = _as_date(day).isoweekday() % DAYS_PER_WEEK
    return day_ordinal_from_sunday_index(sunday_index)


def toggle_week_label(label: WeekLabel) -> WeekLabel:
    """Return the other week label."""
    if label is WeekLabel.FIRST:
        return WeekLabel.SECOND
    return WeekLabel.FIRST


def parse_week_label(value: str | int | WeekLabel) -> WeekLabel:
    """
    Parse a week label from user input.

    Args:
        value: "1", "2", 1, 2 or a WeekLabel

    Returns:
        Matching WeekLabel

    Raises:
        ValueError: If value is not a known week label
    """
    if isinstance(value, WeekLabel):
        return value
    try:
        return WeekLabel(str(value).strip())
    except ValueError as e:
        raise ValueError(f"Invalid week label: {value!r}") from e
