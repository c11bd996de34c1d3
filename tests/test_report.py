"""Tests for plain-text timetable rendering."""

from ulsu_schedule.models import DaySchedule, Lesson, WeekLabel
from ulsu_schedule.report import pair_word, render_schedule

DAYS = [
    DaySchedule(
        weekday="Понедельник",
        day_ordinal=0,
        lessons=(
            Lesson(num=1, time="08:30 – 09:50", text="Математика"),
            Lesson(num=2, time="10:00 – 11:20", text="Программирование"),
        ),
    ),
    DaySchedule(
        weekday="Среда",
        day_ordinal=2,
        lessons=(Lesson(num=2, time="10:00 – 11:20", text="Алгебра"),),
    ),
]


class TestPairWord:
    """Tests for pair_word function."""

    def test_plural_forms(self):
        """Test Russian plural forms of the lesson count."""
        assert pair_word(1) == "пара"
        assert pair_word(2) == "пары"
        assert pair_word(4) == "пары"
        assert pair_word(5) == "пар"
        assert pair_word(0) == "пар"


class TestRenderSchedule:
    """Tests for render_schedule function."""

    def test_header_and_days(self):
        """Test the group header and lesson counts."""
        text = render_schedule(DAYS, group="ИВТ-О-25/1", week_label=WeekLabel.SECOND)

        assert text.startswith("ИВТ-О-25/1 | 2 неделя\n")
        assert "Понедельник | 2 пары" in text
        assert "Среда | 1 пара" in text
        assert "текущая" not in text

    def test_marks_today_and_active_lesson(self):
        """Test today's marker and progress of the running lesson."""
        text = render_schedule(
            DAYS,
            group="ИВТ-О-25/1",
            week_label=WeekLabel.FIRST,
            current_week_label=WeekLabel.FIRST,
            today_ordinal=0,
            now_minutes=620,
        )

        assert "1 неделя (текущая)" in text
        assert "Понедельник | 2 пары  <- сегодня" in text
        assert "Программирование  [идёт, 25%]" in text
        assert "Математика  [" not in text

    def test_other_week_has_no_live_markers(self):
        """Test that the non-current week is never marked live."""
        text = render_schedule(
            DAYS,
            group="ИВТ-О-25/1",
            week_label=WeekLabel.SECOND,
            current_week_label=WeekLabel.FIRST,
            today_ordinal=0,
            now_minutes=620,
        )

        assert "сегодня" not in text
        assert "идёт" not in text

    def test_empty_week(self):
        """Test rendering a week without lessons."""
        text = render_schedule([], group="ПМИ-О-24/1", week_label=WeekLabel.SECOND)

        assert "Нет занятий" in text
        assert "Расписание для этой недели пусто" in text
