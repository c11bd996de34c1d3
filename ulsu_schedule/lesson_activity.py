"""Live lesson activity: is a lesson running now and how far along is it."""

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, time

from ulsu_schedule.models import Lesson, LessonActivityState, LessonTimeRange
from ulsu_schedule.time_range_parser import parse_time_range

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 30  # How often the schedule view refreshes "now"
MINUTES_PER_HOUR = 60


def minutes_since_midnight(moment: datetime | time) -> int:
    """Return the local time of day of ``moment`` in whole minutes."""
    return moment.hour * MINUTES_PER_HOUR + moment.minute


def evaluate_lesson(
    time_range: LessonTimeRange, now_minutes: int
) -> LessonActivityState:
    """
    Evaluate a lesson time range against the current time of day.

    Both ends of the range are inclusive. Progress is not clamped, so an
    inverted range (end < start) is never active and has progress 0.0.

    Args:
        time_range: Parsed lesson time range
        now_minutes: Current time as minutes since midnight

    Returns:
        LessonActivityState for this moment
    """
    is_active = time_range.start <= now_minutes <= time_range.end

    duration = time_range.end - time_range.start
    if duration > 0:
        progress = (now_minutes - time_range.start) / duration
    else:
        progress = 0.0

    return LessonActivityState(is_active=is_active, progress=progress)


def evaluate_lesson_text(
    time_text: str | None, now_minutes: int
) -> LessonActivityState | None:
    """Parse a raw time range and evaluate it; None if the text is malformed."""
    time_range = parse_time_range(time_text)
    if time_range is None:
        return None
    return evaluate_lesson(time_range, now_minutes)


def clamp_progress(progress: float) -> float:
    """Clamp progress to [0, 1] for display."""
    return min(max(progress, 0.0), 1.0)


def find_active_lesson(
    lessons: Sequence[Lesson], now_minutes: int
) -> tuple[Lesson, LessonActivityState] | None:
    """
    Find the first lesson running at ``now_minutes``.

    Lessons with malformed time text are skipped.

    Returns:
        Tuple of (lesson, state), or None if nothing is running
    """
    for lesson in lessons:
        state = evaluate_lesson_text(lesson.time, now_minutes)
        if state is not None and state.is_active:
            return (lesson, state)
    return None


class LessonActivityTicker:
    """
    Re-evaluates lesson activity on a fixed interval in a background thread.

    The callback receives one state per lesson (None for malformed time text).
    Ticks are idempotent: the same ``now`` always yields the same states.
    """

    def __init__(
        self,
        lessons: Sequence[Lesson],
        on_tick: Callable[[list[LessonActivityState | None]], None],
        interval: float = TICK_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.lessons = tuple(lessons)
        self.on_tick = on_tick
        self.interval = interval
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self, now: datetime | None = None) -> list[LessonActivityState | None]:
        """Evaluate every lesson once and hand the states to the callback."""
        if now is None:
            now = self._clock()
        now_minutes = minutes_since_midnight(now)

        states = [
            evaluate_lesson_text(lesson.time, now_minutes) for lesson in self.lessons
        ]
        self.on_tick(states)
        return states

    def start(self):
        """Tick immediately, then every ``interval`` seconds until stopped."""
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="lesson-activity-ticker", daemon=True
        )
        self._thread.start()
        logger.debug("Ticker started (interval=%ss)", self.interval)

    def stop(self):
        """Stop ticking and wait for the thread to exit. Safe to call twice."""
        self._stop_event.set()
        if self._thread is not None:
            # Called from on_tick: the loop exits once the callback returns
            if threading.current_thread() is not self._thread:
                self._thread.join()
            self._thread = None
            logger.debug("Ticker stopped")

    def _run(self):
        self._safe_tick()
        while not self._stop_event.wait(self.interval):
            self._safe_tick()

    def _safe_tick(self):
        try:
            self.tick()
        except Exception:
            logger.exception("Lesson activity tick failed")
