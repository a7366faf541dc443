from datetime import date, datetime, timedelta

from dreamtrack.services.task_date_generator import (
    MAX_TASK_DATES,
    TaskDate,
    calculate_end_date,
    generate_task_dates,
)


def _dates(task_dates: list[TaskDate]) -> list[date]:
    return [item.date for item in task_dates]


def test_end_date_is_inclusive_for_every_unit() -> None:
    start = date(2026, 1, 1)
    assert calculate_end_date(start, 7, "days") == date(2026, 1, 7)
    assert calculate_end_date(start, 2, "weeks") == date(2026, 1, 14)
    assert calculate_end_date(start, 1, "months") == date(2026, 1, 31)
    assert calculate_end_date(date(2026, 1, 31), 1, "months") == date(2026, 2, 27)
    assert calculate_end_date(start, 1, "years") == date(2026, 12, 31)
    assert calculate_end_date(date(2024, 2, 29), 1, "years") == date(2025, 2, 27)


def test_daily_starts_the_day_after_start() -> None:
    task_dates = generate_task_dates(date(2026, 1, 1), 7, "days", "daily")
    assert task_dates == [TaskDate(date=date(2026, 1, day), order=day - 2) for day in range(2, 8)]


def test_weekly_steps_by_seven_days() -> None:
    task_dates = generate_task_dates(date(2026, 1, 1), 4, "weeks", "weekly")
    assert _dates(task_dates) == [date(2026, 1, 8), date(2026, 1, 15), date(2026, 1, 22)]


def test_semi_weekly_alternates_three_and_four_day_gaps() -> None:
    start = date(2026, 3, 1)
    task_dates = generate_task_dates(start, 3, "weeks", "semi-weekly")
    offsets = [(item.date - start).days for item in task_dates]
    assert offsets == [3, 7, 10, 14, 17]
    assert [item.order for item in task_dates] == [0, 1, 2, 3, 4]


def test_monthly_clamps_each_step_independently() -> None:
    task_dates = generate_task_dates(date(2026, 1, 31), 3, "months", "monthly")
    assert _dates(task_dates) == [date(2026, 2, 28), date(2026, 3, 28), date(2026, 4, 28)]

    leap = generate_task_dates(date(2028, 1, 31), 2, "months", "monthly")
    assert _dates(leap) == [date(2028, 2, 29), date(2028, 3, 29)]


def test_single_month_span_ends_before_first_monthly_task() -> None:
    # A months span ends at add_days(add_months(start, duration), -1): Jan 31 + 1 month
    # is Feb 28, minus one day is Feb 27. The first monthly task is Feb 28, one day
    # past that inclusive end, so a single-month span yields no tasks.
    assert generate_task_dates(date(2026, 1, 31), 1, "months", "monthly") == []


def test_leap_day_start_over_one_year() -> None:
    task_dates = generate_task_dates(date(2024, 2, 29), 1, "years", "monthly")
    assert len(task_dates) == 11
    assert task_dates[0].date == date(2024, 3, 29)
    assert task_dates[-1].date == date(2025, 1, 29)
    assert all(item.date <= date(2025, 2, 27) for item in task_dates)


def test_semi_monthly_alternates_first_and_sixteenth() -> None:
    task_dates = generate_task_dates(date(2026, 1, 5), 3, "months", "semi-monthly")
    assert _dates(task_dates) == [
        date(2026, 1, 16),
        date(2026, 2, 1),
        date(2026, 2, 16),
        date(2026, 3, 1),
        date(2026, 3, 16),
        date(2026, 4, 1),
    ]


def test_semi_monthly_first_task_is_strictly_after_start() -> None:
    assert generate_task_dates(date(2026, 1, 16), 1, "months", "semi-monthly")[0].date == date(2026, 2, 1)
    assert generate_task_dates(date(2026, 1, 15), 1, "months", "semi-monthly")[0].date == date(2026, 1, 16)
    assert generate_task_dates(date(2026, 1, 1), 1, "months", "semi-monthly")[0].date == date(2026, 1, 16)

    year_end = generate_task_dates(date(2026, 12, 20), 1, "months", "semi-monthly")
    assert _dates(year_end) == [date(2027, 1, 1), date(2027, 1, 16)]


def test_non_positive_duration_yields_nothing() -> None:
    assert generate_task_dates(date(2026, 1, 1), 0, "days", "daily") == []
    assert generate_task_dates(date(2026, 1, 1), -3, "weeks", "weekly") == []


def test_short_span_can_yield_no_tasks() -> None:
    assert generate_task_dates(date(2026, 1, 1), 1, "days", "daily") == []
    assert generate_task_dates(date(2026, 1, 1), 6, "days", "weekly") == []


def test_unknown_recurrence_falls_back_to_daily() -> None:
    start = date(2026, 1, 1)
    assert generate_task_dates(start, 5, "days", "yearly") == generate_task_dates(start, 5, "days", "daily")


def test_long_daily_span_is_capped() -> None:
    start = date(2026, 1, 1)
    task_dates = generate_task_dates(start, 5000, "days", "daily")
    assert len(task_dates) == MAX_TASK_DATES
    assert task_dates[-1] == TaskDate(date=start + timedelta(days=MAX_TASK_DATES), order=MAX_TASK_DATES - 1)


def test_time_of_day_on_start_is_ignored() -> None:
    task_dates = generate_task_dates(datetime(2026, 1, 1, 18, 30), 3, "days", "daily")
    assert _dates(task_dates) == [date(2026, 1, 2), date(2026, 1, 3)]


def test_spans_near_the_calendar_limit_terminate() -> None:
    task_dates = generate_task_dates(date(9999, 12, 1), 10, "years", "daily")
    assert task_dates[0].date == date(9999, 12, 2)
    assert task_dates[-1].date == date(9999, 12, 30)

    semi_monthly = generate_task_dates(date(9999, 11, 20), 5, "years", "semi-monthly")
    assert _dates(semi_monthly) == [date(9999, 12, 1), date(9999, 12, 16)]


def test_ordering_bounds_and_determinism_across_cadences() -> None:
    starts = [date(2026, 1, 31), date(2024, 2, 29), date(2026, 7, 16), date(2026, 12, 30)]
    spans = [(10, "days"), (6, "weeks"), (5, "months"), (2, "years")]
    recurrences = ["daily", "weekly", "semi-weekly", "monthly", "semi-monthly"]

    for start in starts:
        for duration, unit in spans:
            end_date = calculate_end_date(start, duration, unit)
            for recurrence in recurrences:
                task_dates = generate_task_dates(start, duration, unit, recurrence)
                assert task_dates == generate_task_dates(start, duration, unit, recurrence)
                for index, item in enumerate(task_dates):
                    assert item.order == index
                    assert start < item.date <= end_date
                for earlier, later in zip(task_dates, task_dates[1:]):
                    assert earlier.date < later.date
