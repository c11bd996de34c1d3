"""Tests for live lesson activity evaluation."""

import threading
from datetime import datetime, time

import pytest

from ulsu_schedule.lesson_activity import (
    LessonActivityTicker,
    clamp_progress,
    evaluate_lesson,
    evaluate_lesson_text,
    find_active_lesson,
    minutes_since_midnight,
)
from ulsu_schedule.models import Lesson, LessonActivityState, LessonTimeRange

FIRST_PAIR = LessonTimeRange(start=510, end=600)


class TestEvaluateLesson:
    """Tests for evaluate_lesson function."""

    def test_middle_of_lesson(self):
        """Test a lesson halfway through."""
        state = evaluate_lesson(FIRST_PAIR, 555)
        assert state.is_active is True
        assert state.progress == pytest.approx(0.5)

    def test_before_lesson(self):
        """Test that a lesson is inactive before it starts."""
        state = evaluate_lesson(FIRST_PAIR, 505)
        assert state.is_active is False

    def test_bounds_are_inclusive(self):
        """Test that the start and end minutes both count as active."""
        assert evaluate_lesson(FIRST_PAIR, 510) == LessonActivityState(True, 0.0)
        assert evaluate_lesson(FIRST_PAIR, 600) == LessonActivityState(True, 1.0)
        assert evaluate_lesson(FIRST_PAIR, 601).is_active is False

    def test_progress_is_not_clamped(self):
        """Test that progress outside the lesson is reported as is."""
        assert evaluate_lesson(FIRST_PAIR, 645).progress == pytest.approx(1.5)
        assert evaluate_lesson(FIRST_PAIR, 465).progress == pytest.approx(-0.5)

    def test_zero_length_range(self):
        """Test that a zero-length range has zero progress."""
        state = evaluate_lesson(LessonTimeRange(start=600, end=600), 600)
        assert state == LessonActivityState(is_active=True, progress=0.0)

    def test_inverted_range(self):
        """Test that an inverted range is never active and has zero progress."""
        inverted = LessonTimeRange(start=600, end=510)
        for now in (500, 510, 555, 600, 700):
            assert evaluate_lesson(inverted, now) == LessonActivityState(False, 0.0)

    def test_same_input_same_state(self):
        """Test that evaluation is repeatable."""
        assert evaluate_lesson(FIRST_PAIR, 530) == evaluate_lesson(FIRST_PAIR, 530)


class TestHelpers:
    """Tests for the activity helper functions."""

    def test_minutes_since_midnight(self):
        """Test converting datetimes and times to minutes."""
        assert minutes_since_midnight(datetime(2025, 9, 1, 9, 15, 59)) == 555
        assert minutes_since_midnight(time(0, 0)) == 0
        assert minutes_since_midnight(time(23, 59)) == 1439

    def test_clamp_progress(self):
        """Test clamping progress for display."""
        assert clamp_progress(-0.2) == 0.0
        assert clamp_progress(0.25) == 0.25
        assert clamp_progress(1.7) == 1.0

    def test_evaluate_lesson_text(self):
        """Test parsing and evaluating raw time text."""
        state = evaluate_lesson_text("08:30 – 10:00", 555)
        assert state.is_active is True
        assert evaluate_lesson_text("по договорённости", 555) is None

    def test_find_active_lesson(self):
        """Test finding the running lesson and skipping malformed times."""
        lessons = [
            Lesson(num=1, time="??", text="Без времени"),
            Lesson(num=1, time="08:30 – 09:50", text="Математика"),
            Lesson(num=2, time="10:00 – 11:20", text="Программирование"),
        ]
        lesson, state = find_active_lesson(lessons, 620)
        assert lesson.text == "Программирование"
        assert state.progress == pytest.approx(0.25)

        assert find_active_lesson(lessons, 595) is None  # Break between lessons


class TestLessonActivityTicker:
    """Tests for LessonActivityTicker."""

    LESSONS = [
        Lesson(num=1, time="08:30 – 10:00", text="Математика"),
        Lesson(num=2, time="нет времени", text="Практика"),
    ]

    def test_tick_with_explicit_now(self):
        """Test that a tick evaluates every lesson and calls back."""
        received = []
        ticker = LessonActivityTicker(self.LESSONS, received.append)

        states = ticker.tick(datetime(2025, 9, 1, 9, 15))

        assert states == [LessonActivityState(True, 0.5), None]
        assert received == [states]

    def test_tick_is_idempotent(self):
        """Test that replaying a tick with the same now yields the same states."""
        ticker = LessonActivityTicker(self.LESSONS, lambda states: None)
        now = datetime(2025, 9, 1, 8, 45)
        assert ticker.tick(now) == ticker.tick(now)

    def test_tick_uses_injected_clock(self):
        """Test that the clock is only read when no now is given."""
        ticker = LessonActivityTicker(
            self.LESSONS,
            lambda states: None,
            clock=lambda: datetime(2025, 9, 1, 7, 0),
        )
        assert ticker.tick()[0].is_active is False

    def test_start_and_stop(self):
        """Test that the background thread ticks and can be cancelled."""
        ticked = threading.Event()
        ticker = LessonActivityTicker(
            self.LESSONS,
            lambda states: ticked.set(),
            interval=0.01,
            clock=lambda: datetime(2025, 9, 1, 9, 0),
        )

        ticker.start()
        assert ticked.wait(timeout=2)
        assert ticker.running is True

        ticker.stop()
        assert ticker.running is False
        ticker.stop()  # Second stop is harmless

    def test_stop_from_inside_callback(self):
        """Test that the callback can stop its own ticker."""
        stopped = threading.Event()
        errors = []
        holder = {}

        def on_tick(states):
            try:
                holder["ticker"].stop()
            except Exception as e:
                errors.append(e)
            stopped.set()

        holder["ticker"] = LessonActivityTicker(
            self.LESSONS,
            on_tick,
            interval=0.01,
            clock=lambda: datetime(2025, 9, 1, 9, 0),
        )
        ticker = holder["ticker"]

        ticker.start()
        assert stopped.wait(timeout=2)
        assert errors == []
        assert ticker.running is False

    def test_failing_callback_keeps_ticking(self):
        """Test that an exception in the callback is logged, not fatal."""
        calls = []
        second_call = threading.Event()

        def on_tick(states):
            calls.append(states)
            if len(calls) == 1:
                raise RuntimeError("render failed")
            second_call.set()

        ticker = LessonActivityTicker(
            self.LESSONS,
            on_tick,
            interval=0.01,
            clock=lambda: datetime(2025, 9, 1, 9, 0),
        )

        ticker.start()
        try:
            assert second_call.wait(timeout=2)
        finally:
            ticker.stop()
