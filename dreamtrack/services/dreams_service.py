from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from dreamtrack.models.dreams import Dream, DreamTask
from dreamtrack.services.dream_validation import validate_dream_fields
from dreamtrack.services.task_date_generator import TaskDate, calculate_end_date, generate_task_dates

logger = logging.getLogger(__name__)


class DreamActionError(ValueError):
    pass


class DreamNotFoundError(DreamActionError):
    pass


@dataclass(frozen=True)
class CreateDreamInput:
    title: str
    description: str | None = None
    duration: int | None = None
    duration_unit: str | None = None
    recurrence: str | None = None
    start_date: date | None = None
    task_titles: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpdateDreamInput:
    title: str
    description: str | None = None


def default_task_title(index: int) -> str:
    return f"Task {index + 1}"


def _task_title(task_titles: Sequence[str], index: int) -> str:
    if index < len(task_titles):
        title = task_titles[index].strip()
        if title:
            return title
    return default_task_title(index)


def _build_task_rows(task_dates: list[TaskDate], task_titles: Sequence[str]) -> list[DreamTask]:
    return [
        DreamTask(
            title=_task_title(task_titles, task_date.order),
            due_date=task_date.date,
            sort_order=task_date.order,
            is_completed=False,
        )
        for task_date in task_dates
    ]


def compute_progress(completed_count: int, total_count: int) -> int:
    if total_count <= 0:
        return 0
    return round(completed_count * 100 / total_count)


def list_dreams(session: Session, *, include_completed: bool = True) -> list[Dream]:
    stmt = select(Dream)
    if not include_completed:
        stmt = stmt.where(Dream.is_completed.is_(False))
    stmt = stmt.order_by(Dream.is_completed.asc(), Dream.id.desc())
    return list(session.scalars(stmt).all())


def get_dream(session: Session, dream_id: int) -> Dream:
    dream = session.get(Dream, dream_id)
    if dream is None:
        raise DreamNotFoundError(f"Dream {dream_id} not found")
    return dream


def _get_task(session: Session, dream_id: int, task_id: int) -> DreamTask:
    task = session.get(DreamTask, task_id)
    if task is None or task.dream_id != dream_id:
        raise DreamNotFoundError(f"Task {task_id} not found for dream {dream_id}")
    return task


def create_dream(session: Session, data: CreateDreamInput, *, today: date) -> Dream:
    """Persist a dream and one task row per generated task date.

    Tasks are only generated when duration, unit and recurrence are all
    given; a missing start date means the dream starts today.
    """
    dream = Dream(
        title=data.title.strip(),
        description=data.description,
        duration=data.duration,
        duration_unit=data.duration_unit,
        recurrence=data.recurrence,
        progress=0,
        is_completed=False,
    )

    if data.duration and data.duration_unit and data.recurrence:
        start_date = data.start_date or today
        task_dates = generate_task_dates(start_date, data.duration, data.duration_unit, data.recurrence)
        dream.start_date = start_date
        dream.target_date = calculate_end_date(start_date, data.duration, data.duration_unit)
        dream.tasks = _build_task_rows(task_dates, data.task_titles)
    else:
        dream.start_date = data.start_date

    session.add(dream)
    session.commit()
    session.refresh(dream)
    logger.info(
        "Dream created dream_id=%s duration=%s unit=%s recurrence=%s tasks=%s",
        dream.id,
        dream.duration,
        dream.duration_unit,
        dream.recurrence,
        len(dream.tasks),
    )
    return dream


def recompute_dream_progress(dream: Dream, *, now: datetime) -> Dream:
    tasks = dream.tasks
    completed_count = sum(1 for task in tasks if task.is_completed)
    dream.progress = compute_progress(completed_count, len(tasks))

    all_done = bool(tasks) and completed_count == len(tasks)
    if all_done and not dream.is_completed:
        dream.is_completed = True
        dream.completed_at = now
        logger.info("Dream completed dream_id=%s tasks=%s", dream.id, len(tasks))
    elif not all_done and dream.is_completed:
        dream.is_completed = False
        dream.completed_at = None
    return dream


def complete_task(session: Session, *, dream_id: int, task_id: int, now: datetime) -> Dream:
    dream = get_dream(session, dream_id)
    task = _get_task(session, dream_id, task_id)
    if task.is_completed:
        raise DreamActionError(f"Task {task_id} is already completed")

    task.is_completed = True
    task.completed_at = now
    recompute_dream_progress(dream, now=now)
    session.commit()
    session.refresh(dream)
    logger.info("Task completed dream_id=%s task_id=%s progress=%s", dream_id, task_id, dream.progress)
    return dream


def undo_complete_task(session: Session, *, dream_id: int, task_id: int, now: datetime) -> Dream:
    dream = get_dream(session, dream_id)
    task = _get_task(session, dream_id, task_id)
    if not task.is_completed:
        raise DreamActionError(f"Task {task_id} is not completed")

    task.is_completed = False
    task.completed_at = None
    recompute_dream_progress(dream, now=now)
    session.commit()
    session.refresh(dream)
    logger.info("Task completion undone dream_id=%s task_id=%s progress=%s", dream_id, task_id, dream.progress)
    return dream


def delete_dream(session: Session, *, dream_id: int) -> None:
    dream = get_dream(session, dream_id)
    session.delete(dream)
    session.commit()
    logger.info("Dream deleted dream_id=%s", dream_id)


def update_dream(session: Session, *, dream_id: int, data: UpdateDreamInput) -> Dream:
    """Rename or re-describe a dream; its schedule and tasks are fixed at creation."""
    dream = get_dream(session, dream_id)
    result = validate_dream_fields({"title": data.title, "description": data.description})
    if not result.valid:
        raise DreamActionError("; ".join(result.errors))

    dream.title = data.title.strip()
    dream.description = data.description
    session.commit()
    session.refresh(dream)
    logger.info("Dream updated dream_id=%s", dream_id)
    return dream
