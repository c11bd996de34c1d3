"""Plain-text rendering of a group's weekly timetable."""

from ulsu_schedule.lesson_activity import clamp_progress, evaluate_lesson_text
from ulsu_schedule.models import DaySchedule, Lesson, WeekLabel

EMPTY_WEEK_TITLE = "Нет занятий"
EMPTY_WEEK_TEXT = "Расписание для этой недели пусто"
TODAY_MARKER = "сегодня"
CURRENT_WEEK_MARKER = "текущая"
ACTIVE_MARKER = "идёт"
PAIR_FEW_MIN = 2
PAIR_FEW_MAX = 4


def pair_word(count: int) -> str:
    """Russian plural of "пара" as used after a lesson count."""
    if count == 1:
        return "пара"
    if PAIR_FEW_MIN <= count <= PAIR_FEW_MAX:
        return "пары"
    return "пар"


def week_title(week_label: WeekLabel) -> str:
    return f"{week_label.value} неделя"


def _render_lesson(lesson: Lesson, now_minutes: int | None) -> str:
    line = f"  {lesson.num}. {lesson.time:<15} {lesson.text}"
    if now_minutes is None:
        return line

    state = evaluate_lesson_text(lesson.time, now_minutes)
    if state is None or not state.is_active:
        return line

    percent = round(clamp_progress(state.progress) * 100)
    return f"{line}  [{ACTIVE_MARKER}, {percent}%]"


def render_schedule(
    days: list[DaySchedule],
    group: str,
    week_label: WeekLabel,
    current_week_label: WeekLabel | None = None,
    today_ordinal: int | None = None,
    now_minutes: int | None = None,
) -> str:
    """
    Render a weekly timetable as text.

    Today's weekday and the running lesson are only marked when the shown
    week is the current one.

    Args:
        days: Projected schedule, Monday to Saturday
        group: Group name for the header
        week_label: Week being shown
        current_week_label: Week in effect today, if known
        today_ordinal: Today's day ordinal (Monday = 0), if known
        now_minutes: Current time as minutes since midnight, if known

    Returns:
        Multi-line timetable text
    """
    is_current_week = week_label == current_week_label

    header = f"{group} | {week_title(week_label)}"
    if is_current_week:
        header += f" ({CURRENT_WEEK_MARKER})"
    lines = [header, ""]

    if not days:
        lines.append(EMPTY_WEEK_TITLE)
        lines.append(EMPTY_WEEK_TEXT)
        return "\n".join(lines) + "\n"

    for day in days:
        is_today = is_current_week and day.day_ordinal == today_ordinal
        count = len(day.lessons)
        day_line = f"{day.weekday} | {count} {pair_word(count)}"
        if is_today:
            day_line += f"  <- {TODAY_MARKER}"
        lines.append(day_line)

        lesson_now = now_minutes if is_today else None
        lines.extend(_render_lesson(lesson, lesson_now) for lesson in day.lessons)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
