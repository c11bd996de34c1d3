"""Load the pre-built schedule.json from disk or from a published URL."""

import json
import logging
import os
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class ScheduleError(Exception):
    """Base exception for schedule data errors."""


class ScheduleDataError(ScheduleError):
    """Schedule data is not valid JSON or has the wrong shape."""


class ScheduleFetchError(ScheduleError):
    """Published schedule could not be downloaded."""


# Constants
PACKAGED_SCHEDULE_FILE = Path(__file__).resolve().parent / "data" / "schedule.json"
DEFAULT_SCHEDULE_FILE = Path(os.getenv("ULSU_SCHEDULE_FILE", PACKAGED_SCHEDULE_FILE))
SCHEDULE_URL = os.getenv("ULSU_SCHEDULE_URL")
REQUEST_TIMEOUT_SECONDS = 30
REQUIRED_LESSON_KEYS = {"num", "time", "text"}
# category -> course -> group -> week -> weekday
MAPPING_LEVELS = ("category", "course", "group", "week", "weekday")


def validate_schedule_data(data: dict) -> dict:
    """
    Validate the nested schedule mapping.

    Expected shape:
        category -> course -> group -> week ("1"|"2") -> weekday -> [lesson, ...]
    where each lesson has at least the keys in ``REQUIRED_LESSON_KEYS``.

    Returns:
        The same data, unchanged

    Raises:
        ScheduleDataError: If any level has the wrong type or a lesson is incomplete
    """
    _validate_level(data, 0, "schedule")
    return data


def _validate_level(node, depth: int, path: str):
    level = MAPPING_LEVELS[depth]
    if not isinstance(node, dict):
        raise ScheduleDataError(f"Expected mapping of {level} at {path}")

    for key, child in node.items():
        child_path = f"{path}/{key}"
        if depth + 1 < len(MAPPING_LEVELS):
            _validate_level(child, depth + 1, child_path)
        else:
            _validate_lessons(child, child_path)


def _validate_lessons(lessons, path: str):
    if not isinstance(lessons, list):
        raise ScheduleDataError(f"Expected list of lessons at {path}")

    for lesson in lessons:
        if not isinstance(lesson, dict):
            raise ScheduleDataError(f"Each lesson at {path} must be a mapping")
        missing = REQUIRED_LESSON_KEYS - lesson.keys()
        if missing:
            raise ScheduleDataError(
                f"Lesson at {path} missing keys: {', '.join(sorted(missing))}"
            )


def load_schedule_data(filepath: Path = DEFAULT_SCHEDULE_FILE) -> dict:
    """
    Load schedule data from a JSON file.

    Args:
        filepath: Path to schedule.json

    Returns:
        Validated nested schedule mapping
    """
    if not filepath.exists():
        error_msg = f"File not found: {filepath}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ScheduleDataError(f"Invalid JSON in {filepath}: {e}") from e

    validate_schedule_data(data)
    logger.info("Loaded schedule for %d categories from %s", len(data), filepath)

    return data


def fetch_schedule_data(url: str) -> dict:
    """
    Download a published copy of the pre-built schedule.json.

    Args:
        url: HTTP(S) URL of the JSON file

    Returns:
        Validated nested schedule mapping
    """
    if not url:
        raise ScheduleFetchError("Schedule URL not configured")

    try:
        logger.info("Fetching schedule from %s", url)
        response = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.Timeout as e:
        raise ScheduleFetchError("Request timed out") from e
    except requests.RequestException as e:
        raise ScheduleFetchError(f"Request failed: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise ScheduleDataError(f"Failed to parse schedule response: {e}") from e

    validate_schedule_data(data)
    logger.info("Fetched schedule for %d categories", len(data))

    return data


def load_schedule(source: str | Path | None = None) -> dict:
    """
    Load schedule data from a URL or a file path.

    Falls back to ``ULSU_SCHEDULE_URL`` and then ``DEFAULT_SCHEDULE_FILE``
    when no source is given.
    """
    if source is None:
        source = SCHEDULE_URL or DEFAULT_SCHEDULE_FILE

    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        return fetch_schedule_data(source_str)
    return load_schedule_data(Path(source))
