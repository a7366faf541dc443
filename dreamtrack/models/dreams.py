from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dreamtrack.models.base import Base, TimestampMixin


DURATION_UNITS = ("days", "weeks", "months", "years")
RECURRENCES = ("daily", "weekly", "semi-weekly", "monthly", "semi-monthly")

TITLE_MAX_LENGTH = 24
DESCRIPTION_MAX_LENGTH = 60


class Dream(TimestampMixin, Base):
    __tablename__ = "dreams"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_dreams_progress_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_unit: Mapped[str | None] = mapped_column(String(16), nullable=True)
    recurrence: Mapped[str | None] = mapped_column(String(16), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    tasks: Mapped[list["DreamTask"]] = relationship(
        back_populates="dream",
        cascade="all, delete-orphan",
        order_by="DreamTask.sort_order",
    )


class DreamTask(TimestampMixin, Base):
    __tablename__ = "dream_tasks"
    __table_args__ = (UniqueConstraint("dream_id", "sort_order", name="uq_dream_tasks_dream_sort_order"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    dream_id: Mapped[int] = mapped_column(ForeignKey("dreams.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)

    dream: Mapped[Dream] = relationship(back_populates="tasks")
