"""CLI entry point for the ULSU class schedule."""

import logging
import sys
from datetime import datetime
from pathlib import Path

from ulsu_schedule.data_loader import ScheduleDataError, ScheduleError, load_schedule
from ulsu_schedule.lesson_activity import minutes_since_midnight
from ulsu_schedule.report import render_schedule
from ulsu_schedule.schedule_projector import (
    default_group,
    group_exists,
    list_categories,
    list_courses,
    project_schedule,
)
from ulsu_schedule.time_range_parser import parse_clock_time
from ulsu_schedule.week_detector import (
    parse_week_label,
    resolve_day_ordinal,
    resolve_week_label,
)

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: python main.py [<category> [<course>]] [--group NAME] [--week 1|2] "
    "[--date YYYY-MM-DD] [--time HH:MM] [--schedule PATH|URL] [--output FILE]"
)
OPTIONS = ("--group", "--week", "--date", "--time", "--schedule", "--output")


class UsageError(Exception):
    """Invalid command line arguments."""


def parse_args(argv: list[str]) -> dict:
    """
    Split command line arguments into positionals and --options.

    Args:
        argv: Arguments without the program name

    Returns:
        Dict with "positional" (list) and one key per option (str or None)
    """
    args = {option.lstrip("-"): None for option in OPTIONS}
    args["positional"] = []

    remaining = list(argv)
    while remaining:
        arg = remaining.pop(0)
        if arg.startswith("--"):
            if arg not in OPTIONS:
                raise UsageError(f"Unknown option: {arg}")
            if not remaining:
                raise UsageError(f"Missing value for {arg}")
            args[arg.lstrip("-")] = remaining.pop(0)
        else:
            args["positional"].append(arg)

    if len(args["positional"]) > 2:
        raise UsageError("Too many arguments")

    return args


def resolve_now(date_str: str | None, time_str: str | None) -> datetime:
    """Build the moment to show the schedule for; defaults to the wall clock."""
    now = datetime.now()

    if date_str:
        try:
            day = datetime.strptime(date_str, "%Y-%m-%d").date()
        except ValueError as e:
            raise UsageError(f"Invalid date format: {date_str}") from e
        now = datetime.combine(day, now.time())

    if time_str:
        minutes = parse_clock_time(time_str)
        if minutes is None:
            raise UsageError(f"Invalid time format: {time_str}")
        hour, minute = divmod(minutes, 60)
        try:
            now = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
        except ValueError as e:
            raise UsageError(f"Invalid time format: {time_str}") from e

    return now


def build_report(data: dict, args: dict, now: datetime) -> str:
    """Produce the text output for the parsed arguments."""
    positional = args["positional"]

    if not positional:
        return "\n".join(list_categories(data)) + "\n"

    category = positional[0]
    if len(positional) == 1:
        return "\n".join(list_courses(data, category)) + "\n"

    course = positional[1]
    group = args["group"] or default_group(data, category, course)
    if group is None or not group_exists(data, category, course, group):
        raise UsageError(f"Unknown group: {category} / {course} / {group}")

    current_week = resolve_week_label(now)
    try:
        week = parse_week_label(args["week"]) if args["week"] else current_week
    except ValueError as e:
        raise UsageError(str(e)) from e

    days = project_schedule(data, category, course, group, week)
    return render_schedule(
        days,
        group=group,
        week_label=week,
        current_week_label=current_week,
        today_ordinal=resolve_day_ordinal(now),
        now_minutes=minutes_since_midnight(now),
    )


def main():
    """Main CLI function."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler("ulsu_schedule.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    try:
        args = parse_args(sys.argv[1:])
        now = resolve_now(args["date"], args["time"])
        data = load_schedule(args["schedule"])
        report = build_report(data, args, now)
    except UsageError as e:
        logger.error("%s\n%s", e, USAGE)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("Schedule file error: %s", e)
        sys.exit(1)
    except ScheduleDataError as e:
        logger.error("Data error: %s", e)
        sys.exit(1)
    except ScheduleError as e:
        logger.error("Schedule error: %s", e)
        sys.exit(1)

    # Output results
    output_file = args["output"]
    if output_file:
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(report)
        logger.info("Wrote schedule to %s", output_file)
    else:
        sys.stdout.write(report)


if __name__ == "__main__":
    main()
