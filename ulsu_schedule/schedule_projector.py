"""Select the timetable of one group and week from the pre-built schedule data."""

import logging

from ulsu_schedule.date_utils import (
    WEEKDAY_NAMES,
    WEEKDAY_TO_ORDINAL,
    canonical_weekday,
)
from ulsu_schedule.models import DaySchedule, Lesson, WeekLabel

logger = logging.getLogger(__name__)


def list_categories(data: dict) -> list[str]:
    """Return the study directions (top-level keys), sorted."""
    return sorted(data)


def list_courses(data: dict, category: str) -> list[str]:
    """Return the courses of a category, sorted; empty if unknown."""
    return sorted(data.get(category, {}))


def default_group(data: dict, category: str, course: str) -> str | None:
    """Return the first group of a course, or None if the course has none."""
    groups = data.get(category, {}).get(course, {})
    return next(iter(groups), None)


def group_exists(data: dict, category: str, course: str, group: str) -> bool:
    """Check that a previously chosen group is still present in the data."""
    return group in data.get(category, {}).get(course, {})


def _index_weekdays(week_data: dict) -> dict[str, list]:
    """Map canonical weekday names to their lesson lists, ignoring key case."""
    indexed = {}
    for key, lessons in week_data.items():
        weekday = canonical_weekday(key)
        if weekday is None:
            logger.debug("Ignoring unknown weekday key: %s", key)
            continue
        # First key wins when two keys differ only by case
        indexed.setdefault(weekday, lessons)
    return indexed


def project_schedule(
    data: dict,
    category: str,
    course: str,
    group: str,
    week_label: WeekLabel,
) -> list[DaySchedule]:
    """
    Build the weekly timetable of a group for one week label.

    Weekdays are ordered Monday to Saturday. A weekday that is missing or has
    no lessons is left out. Lessons keep their input order.

    Args:
        data: Nested mapping category -> course -> group -> week -> weekday -> lessons
        category: Study direction
        course: Course key
        group: Group name
        week_label: Which of the two alternating weeks to show

    Returns:
        List of DaySchedule objects (empty if the group or week is unknown)
    """
    group_data = data.get(category, {}).get(course, {}).get(group)
    if group_data is None:
        logger.warning("No schedule for group %s / %s / %s", category, course, group)
        return []

    week_data = group_data.get(week_label.value) or {}
    lessons_by_day = _index_weekdays(week_data)

    schedule = []
    for weekday in WEEKDAY_NAMES:
        raw_lessons = lessons_by_day.get(weekday)
        if not raw_lessons:
            continue

        lessons = tuple(
            Lesson(
                num=raw.get("num", position),
                time=raw.get("time", ""),
                text=raw.get("text", ""),
            )
            for position, raw in enumerate(raw_lessons, 1)
        )
        schedule.append(
            DaySchedule(
                weekday=weekday,
                day_ordinal=WEEKDAY_TO_ORDINAL[weekday],
                lessons=lessons,
            )
        )

    logger.debug(
        "Projected %d days for %s, week %s", len(schedule), group, week_label.value
    )
    return schedule
