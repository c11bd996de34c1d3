"""Shared weekday tables and day-ordinal helpers."""

# Day names used in the schedule data, Monday first (Sunday is never scheduled)
WEEKDAY_NAMES = [
    "Понедельник",
    "Вторник",
    "Среда",
    "Четверг",
    "Пятница",
    "Суббота",
]

# Case-folded weekday name -> canonical name
WEEKDAY_LOOKUP = {name.casefold(): name for name in WEEKDAY_NAMES}

# Canonical weekday name -> day ordinal (Monday = 0)
WEEKDAY_TO_ORDINAL = {name: i for i, name in enumerate(WEEKDAY_NAMES)}

SUNDAY_INDEX = 0  # Sunday in Sunday-first numbering
SUNDAY_ORDINAL = 6  # Sunday in Monday-first numbering


def canonical_weekday(name: str) -> str | None:
    """Return the canonical weekday name for ``name`` (any case), or None."""
    return WEEKDAY_LOOKUP.get(name.strip().casefold())


def day_ordinal_from_sunday_index(sunday_index: int) -> int:
    """
    Convert Sunday-first weekday numbering to a Monday-first day ordinal.

    Args:
        sunday_index: Weekday where 0 = Sunday, 1 = Monday ... 6 = Saturday

    Returns:
        Day ordinal where 0 = Monday ... 6 = Sunday
    """
    if sunday_index == SUNDAY_INDEX:
        return SUNDAY_ORDINAL
    return sunday_index - 1
