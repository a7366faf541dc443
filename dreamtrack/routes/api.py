from __future__ import annotations

from datetime import date, datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dreamtrack.db import check_db_health, get_db_session
from dreamtrack.models.dreams import Dream, DreamTask
from dreamtrack.services.dream_validation import local_today, parse_start_date, validate_dream_fields
from dreamtrack.services.dreams_service import (
    CreateDreamInput,
    DreamActionError,
    DreamNotFoundError,
    complete_task,
    create_dream,
    delete_dream,
    get_dream,
    list_dreams,
    undo_complete_task,
    update_dream,
    UpdateDreamInput,
)
from dreamtrack.services.task_date_generator import calculate_end_date, generate_task_dates

api_router = APIRouter(tags=["api"])


class DreamTaskResponse(BaseModel):
    id: int
    title: str
    due_date: date
    order: int
    is_completed: bool

    @classmethod
    def from_model(cls, task: DreamTask) -> "DreamTaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            due_date=task.due_date,
            order=task.sort_order,
            is_completed=task.is_completed,
        )


class DreamResponse(BaseModel):
    id: int
    title: str
    description: str | None
    duration: int | None
    duration_unit: str | None
    recurrence: str | None
    start_date: date | None
    target_date: date | None
    progress: int
    is_completed: bool
    task_count: int

    @classmethod
    def from_model(cls, dream: Dream) -> "DreamResponse":
        return cls(
            id=dream.id,
            title=dream.title,
            description=dream.description,
            duration=dream.duration,
            duration_unit=dream.duration_unit,
            recurrence=dream.recurrence,
            start_date=dream.start_date,
            target_date=dream.target_date,
            progress=dream.progress,
            is_completed=dream.is_completed,
            task_count=len(dream.tasks),
        )


class DreamDetailResponse(DreamResponse):
    tasks: list[DreamTaskResponse]

    @classmethod
    def from_model(cls, dream: Dream) -> "DreamDetailResponse":
        summary = DreamResponse.from_model(dream)
        return cls(
            **summary.model_dump(),
            tasks=[DreamTaskResponse.from_model(task) for task in dream.tasks],
        )


def _action_error_to_http(exc: DreamActionError) -> HTTPException:
    status_code = 404 if isinstance(exc, DreamNotFoundError) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


def _validated_or_400(payload: dict[str, Any], *, today: date, require_title: bool = True) -> None:
    result = validate_dream_fields(payload, today=today, require_title=require_title)
    if not result.valid:
        raise HTTPException(status_code=400, detail=result.errors)


def _task_titles(payload: dict[str, Any]) -> tuple[str, ...]:
    raw = payload.get("task_titles") or []
    if not isinstance(raw, list):
        return ()
    return tuple(title if isinstance(title, str) else "" for title in raw)


@api_router.get("/health")
def health_check(db: Session = Depends(get_db_session)) -> dict[str, str]:
    try:
        check_db_health(db)
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=503, detail="database unavailable") from exc
    return {"status": "ok"}


@api_router.post("/task-dates/preview")
def preview_task_dates(payload: dict[str, Any] = Body(...)) -> dict[str, object]:
    run_today = local_today()
    required = [name for name in ("duration", "duration_unit", "recurrence") if payload.get(name) in (None, "")]
    if required:
        raise HTTPException(status_code=400, detail=[f"{name} is required" for name in required])
    _validated_or_400(payload, today=run_today, require_title=False)

    start_date = parse_start_date(payload.get("start_date")) or run_today
    duration = payload["duration"]
    duration_unit = payload["duration_unit"]
    task_dates = generate_task_dates(start_date, duration, duration_unit, payload["recurrence"])
    return {
        "start_date": start_date.isoformat(),
        "end_date": calculate_end_date(start_date, duration, duration_unit).isoformat(),
        "task_dates": [{"date": item.date.isoformat(), "order": item.order} for item in task_dates],
    }


@api_router.get("/dreams", response_model=list[DreamResponse])
def dreams_list(
    include_completed: bool = Query(default=True),
    db: Session = Depends(get_db_session),
) -> list[DreamResponse]:
    return [DreamResponse.from_model(dream) for dream in list_dreams(db, include_completed=include_completed)]


@api_router.post("/dreams", response_model=DreamDetailResponse, status_code=201)
def dreams_create(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db_session),
) -> DreamDetailResponse:
    run_today = local_today()
    _validated_or_400(payload, today=run_today)

    dream = create_dream(
        db,
        CreateDreamInput(
            title=payload["title"],
            description=payload.get("description"),
            duration=payload.get("duration"),
            duration_unit=payload.get("duration_unit") or None,
            recurrence=payload.get("recurrence") or None,
            start_date=parse_start_date(payload.get("start_date")),
            task_titles=_task_titles(payload),
        ),
        today=run_today,
    )
    return DreamDetailResponse.from_model(dream)


@api_router.get("/dreams/{dream_id}", response_model=DreamDetailResponse)
def dreams_detail(dream_id: int, db: Session = Depends(get_db_session)) -> DreamDetailResponse:
    try:
        dream = get_dream(db, dream_id)
    except DreamActionError as exc:
        raise _action_error_to_http(exc) from exc
    return DreamDetailResponse.from_model(dream)


@api_router.put("/dreams/{dream_id}", response_model=DreamDetailResponse)
def dreams_update(
    dream_id: int,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db_session),
) -> DreamDetailResponse:
    editable = {"title": payload.get("title"), "description": payload.get("description")}
    _validated_or_400(editable, today=local_today())

    try:
        dream = update_dream(
            db,
            dream_id=dream_id,
            data=UpdateDreamInput(title=editable["title"], description=editable["description"]),
        )
    except DreamActionError as exc:
        raise _action_error_to_http(exc) from exc
    return DreamDetailResponse.from_model(dream)


@api_router.delete("/dreams/{dream_id}", status_code=204)
def dreams_delete(dream_id: int, db: Session = Depends(get_db_session)) -> None:
    try:
        delete_dream(db, dream_id=dream_id)
    except DreamActionError as exc:
        raise _action_error_to_http(exc) from exc


@api_router.post("/dreams/{dream_id}/tasks/{task_id}/complete", response_model=DreamDetailResponse)
def complete_task_api(dream_id: int, task_id: int, db: Session = Depends(get_db_session)) -> DreamDetailResponse:
    try:
        dream = complete_task(db, dream_id=dream_id, task_id=task_id, now=datetime.now())
    except DreamActionError as exc:
        raise _action_error_to_http(exc) from exc
    return DreamDetailResponse.from_model(dream)


@api_router.post("/dreams/{dream_id}/tasks/{task_id}/undo-complete", response_model=DreamDetailResponse)
def undo_complete_task_api(dream_id: int, task_id: int, db: Session = Depends(get_db_session)) -> DreamDetailResponse:
    try:
        dream = undo_complete_task(db, dream_id=dream_id, task_id=task_id, now=datetime.now())
    except DreamActionError as exc:
        raise _action_error_to_http(exc) from exc
    return DreamDetailResponse.from_model(dream)
