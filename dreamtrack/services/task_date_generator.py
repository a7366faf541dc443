from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date, datetime

from dreamtrack.services.date_arithmetic import (
    add_days,
    add_months,
    add_years,
    normalize_to_local_midnight,
)

logger = logging.getLogger(__name__)


MAX_TASK_DATES = 1000
SEMI_MONTHLY_DAYS = (1, 16)


@dataclass(frozen=True)
class TaskDate:
    date: date
    order: int


def calculate_end_date(start_date: date | datetime, duration: int, duration_unit: str) -> date:
    """Inclusive last day of a ``duration`` long span beginning on ``start_date``.

    A 7 day span starting on day X ends on day X+6; month and year spans end
    the day before the (clamped) anniversary. Unknown units count as days.
    """
    start = normalize_to_local_midnight(start_date)

    if duration_unit == "weeks":
        return add_days(start, duration * 7 - 1)
    if duration_unit == "months":
        return add_days(add_months(start, duration), -1)
    if duration_unit == "years":
        return add_days(add_years(start, duration), -1)
    return add_days(start, duration - 1)


def _collect(start: date, end_date: date, candidates: Iterator[date]) -> list[TaskDate]:
    results: list[TaskDate] = []
    previous = start
    for candidate in candidates:
        if len(results) >= MAX_TASK_DATES or candidate > end_date:
            break
        if candidate <= previous:
            # Clamping at date.max stops the cadence from advancing.
            break
        results.append(TaskDate(date=candidate, order=len(results)))
        previous = candidate
    return results


def _fixed_step(start: date, step_days: int) -> Iterator[date]:
    current = start
    while True:
        current = add_days(current, step_days)
        yield current


def _semi_weekly_steps(start: date) -> Iterator[date]:
    current = add_days(start, 3)
    yield current
    for gap in itertools.cycle((4, 3)):
        current = add_days(current, gap)
        yield current


def _monthly_steps(start: date) -> Iterator[date]:
    current = start
    while True:
        current = add_months(current, 1)
        yield current


def _semi_monthly_steps(start: date) -> Iterator[date]:
    first_day, mid_day = SEMI_MONTHLY_DAYS
    if start.day < mid_day:
        current = start.replace(day=mid_day)
    else:
        current = add_months(start.replace(day=first_day), 1)
    yield current

    while True:
        if current.day == first_day:
            current = current.replace(day=mid_day)
        else:
            current = add_months(current.replace(day=first_day), 1)
        yield current


def plan_daily(start: date, end_date: date) -> list[TaskDate]:
    return _collect(start, end_date, _fixed_step(start, 1))


def plan_weekly(start: date, end_date: date) -> list[TaskDate]:
    return _collect(start, end_date, _fixed_step(start, 7))


def plan_semi_weekly(start: date, end_date: date) -> list[TaskDate]:
    """Two tasks a week: 3 days after start, then gaps of 4, 3, 4, 3, ... days."""
    return _collect(start, end_date, _semi_weekly_steps(start))


def plan_monthly(start: date, end_date: date) -> list[TaskDate]:
    """One task per month, each step clamped to the end of a short month.

    Steps chain from the previous task, so Jan 31 yields Feb 28 then Mar 28.
    """
    return _collect(start, end_date, _monthly_steps(start))


def plan_semi_monthly(start: date, end_date: date) -> list[TaskDate]:
    """Tasks on the 1st and 16th, starting with whichever comes strictly after start."""
    return _collect(start, end_date, _semi_monthly_steps(start))


PLANNERS: dict[str, Callable[[date, date], list[TaskDate]]] = {
    "daily": plan_daily,
    "weekly": plan_weekly,
    "semi-weekly": plan_semi_weekly,
    "monthly": plan_monthly,
    "semi-monthly": plan_semi_monthly,
}


def generate_task_dates(
    start_date: date | datetime,
    duration: int,
    duration_unit: str,
    recurrence: str,
) -> list[TaskDate]:
    if duration <= 0:
        return []

    start = normalize_to_local_midnight(start_date)
    end_date = calculate_end_date(start, duration, duration_unit)

    planner = PLANNERS.get(recurrence)
    if planner is None:
        logger.debug("Unrecognized recurrence=%r; using daily cadence", recurrence)
        planner = plan_daily

    task_dates = planner(start, end_date)
    logger.debug(
        "Generated task dates start=%s end=%s unit=%s recurrence=%s count=%s",
        start,
        end_date,
        duration_unit,
        recurrence,
        len(task_dates),
    )
    return task_dates
