"""Data models for week labels, lessons and lesson activity."""

from dataclasses import dataclass
from enum import Enum


class WeekLabel(Enum):
    """One of the two alternating weekly schedules."""

    FIRST = "1"
    SECOND = "2"


@dataclass(frozen=True)
class LessonTimeRange:
    """Lesson start and end as minutes since local midnight."""

    start: int
    end: int


@dataclass(frozen=True)
class LessonActivityState:
    """
    Whether a lesson is running right now and how far through it the clock is.

    Note: progress is not clamped; callers clamp it for display.
    """

    is_active: bool
    progress: float


@dataclass(frozen=True)
class Lesson:
    """A single lesson slot as stored in the schedule data."""

    num: int
    time: str  # Raw time range, e.g. "08:30 – 09:50"
    text: str  # Free text: subject, teacher, room


@dataclass(frozen=True)
class DaySchedule:
    """Lessons of one weekday, in their original order."""

    weekday: str  # Canonical weekday name
    day_ordinal: int  # Monday = 0
    lessons: tuple[Lesson, ...]
