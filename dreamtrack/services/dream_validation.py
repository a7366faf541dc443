from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dreamtrack.config import get_settings
from dreamtrack.models.dreams import (
    DESCRIPTION_MAX_LENGTH,
    DURATION_UNITS,
    RECURRENCES,
    TITLE_MAX_LENGTH,
)
from dreamtrack.services.date_arithmetic import normalize_to_local_midnight


@dataclass(frozen=True)
class DreamValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def local_zone() -> ZoneInfo | None:
    try:
        return ZoneInfo(get_settings().timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def local_today() -> date:
    return datetime.now(local_zone()).date()


def parse_start_date(value: object) -> date | None:
    """Coerce a request value into a calendar day, or None when it is not a date."""
    if isinstance(value, (date, datetime)):
        return normalize_to_local_midnight(value, local_zone())
    if isinstance(value, str):
        try:
            return normalize_to_local_midnight(datetime.fromisoformat(value.strip()), local_zone())
        except ValueError:
            return None
    return None


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_dream_fields(
    data: Mapping[str, object],
    *,
    today: date | None = None,
    require_title: bool = True,
) -> DreamValidationResult:
    """Check dream fields ahead of task generation.

    Every violation is collected so the caller can return the whole list.
    Optional fields are only checked when present and non-empty; the title
    may be skipped for date previews that are not tied to a dream yet.
    """
    errors: list[str] = []

    title = data.get("title")
    if require_title or title is not None:
        if isinstance(title, str):
            title = title.strip()
        if not title or not isinstance(title, str):
            errors.append("Dream name is required")
        elif len(title) > TITLE_MAX_LENGTH:
            errors.append(f"Dream name must be {TITLE_MAX_LENGTH} characters or less")

    description = data.get("description")
    if description is not None:
        if not isinstance(description, str):
            errors.append("Description must be text")
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less")

    duration = data.get("duration")
    if duration is not None and not _is_positive_int(duration):
        errors.append("Duration must be a positive integer")

    duration_unit = data.get("duration_unit")
    if duration_unit and duration_unit not in DURATION_UNITS:
        errors.append("Duration unit must be days, weeks, months, or years")

    recurrence = data.get("recurrence")
    if recurrence and recurrence not in RECURRENCES:
        errors.append("Recurrence must be daily, weekly, semi-weekly, monthly, or semi-monthly")

    raw_start_date = data.get("start_date")
    if raw_start_date:
        start_date = parse_start_date(raw_start_date)
        if start_date is None:
            errors.append("Start date must be a valid date")
        elif start_date < (today or local_today()):
            errors.append("Start date cannot be in the past")

    return DreamValidationResult(valid=not errors, errors=errors)
