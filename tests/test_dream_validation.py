from datetime import date, datetime, timedelta

from dreamtrack.services.dream_validation import DreamValidationResult, parse_start_date, validate_dream_fields


TODAY = date(2026, 1, 10)


def _valid_fields(**overrides: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "title": "Run a marathon",
        "description": "Train three times a week",
        "duration": 12,
        "duration_unit": "weeks",
        "recurrence": "semi-weekly",
        "start_date": "2026-01-10",
    }
    fields.update(overrides)
    return fields


def test_all_valid_fields_pass() -> None:
    assert validate_dream_fields(_valid_fields(), today=TODAY) == DreamValidationResult(valid=True, errors=[])


def test_title_is_required_and_limited_to_24_characters() -> None:
    missing = validate_dream_fields(_valid_fields(title=None), today=TODAY)
    assert missing.errors == ["Dream name is required"]

    blank = validate_dream_fields(_valid_fields(title="    "), today=TODAY)
    assert blank.errors == ["Dream name is required"]

    not_text = validate_dream_fields(_valid_fields(title=42), today=TODAY)
    assert not_text.errors == ["Dream name is required"]

    too_long = validate_dream_fields(_valid_fields(title="x" * 25), today=TODAY)
    assert not too_long.valid
    assert too_long.errors == ["Dream name must be 24 characters or less"]

    assert validate_dream_fields(_valid_fields(title="x" * 24), today=TODAY).valid
    assert validate_dream_fields(_valid_fields(title="  " + "x" * 24 + "  "), today=TODAY).valid


def test_description_is_optional_and_limited_to_60_characters() -> None:
    fields = _valid_fields()
    del fields["description"]
    assert validate_dream_fields(fields, today=TODAY).valid

    assert validate_dream_fields(_valid_fields(description="d" * 60), today=TODAY).valid
    too_long = validate_dream_fields(_valid_fields(description="d" * 61), today=TODAY)
    assert too_long.errors == ["Description must be 60 characters or less"]


def test_duration_must_be_a_positive_integer() -> None:
    for bad in (-1, 0, 2.5, "3", True):
        result = validate_dream_fields(_valid_fields(duration=bad), today=TODAY)
        assert result.errors == ["Duration must be a positive integer"], bad


def test_enumerations_are_checked() -> None:
    unit = validate_dream_fields(_valid_fields(duration_unit="decades"), today=TODAY)
    assert unit.errors == ["Duration unit must be days, weeks, months, or years"]

    recurrence = validate_dream_fields(_valid_fields(recurrence="bi-weekly"), today=TODAY)
    assert recurrence.errors == ["Recurrence must be daily, weekly, semi-weekly, monthly, or semi-monthly"]


def test_start_date_cannot_be_in_the_past() -> None:
    yesterday = validate_dream_fields(_valid_fields(start_date=TODAY - timedelta(days=1)), today=TODAY)
    assert yesterday.errors == ["Start date cannot be in the past"]

    assert validate_dream_fields(_valid_fields(start_date=TODAY), today=TODAY).valid
    assert validate_dream_fields(_valid_fields(start_date=datetime(2026, 1, 10, 23, 0)), today=TODAY).valid

    garbage = validate_dream_fields(_valid_fields(start_date="next tuesday"), today=TODAY)
    assert garbage.errors == ["Start date must be a valid date"]


def test_start_date_defaults_to_the_current_day() -> None:
    assert validate_dream_fields(_valid_fields(start_date=date.today() + timedelta(days=30))).valid
    assert not validate_dream_fields(_valid_fields(start_date=date(2000, 1, 1))).valid


def test_every_violation_is_reported() -> None:
    result = validate_dream_fields(
        {
            "title": "t" * 25,
            "description": "d" * 61,
            "duration": -1,
            "duration_unit": "decades",
            "recurrence": "hourly",
            "start_date": "2026-01-09",
        },
        today=TODAY,
    )
    assert not result.valid
    assert len(result.errors) == 6


def test_title_can_be_skipped_for_previews() -> None:
    fields = _valid_fields()
    del fields["title"]
    assert validate_dream_fields(fields, today=TODAY, require_title=False).valid
    assert not validate_dream_fields(fields, today=TODAY).valid


def test_parse_start_date_accepts_dates_and_iso_strings() -> None:
    assert parse_start_date("2026-02-01") == date(2026, 2, 1)
    assert parse_start_date("2026-02-01T08:30:00") == date(2026, 2, 1)
    assert parse_start_date(date(2026, 2, 1)) == date(2026, 2, 1)
    assert parse_start_date("02/01/2026") is None
    assert parse_start_date(20260201) is None
