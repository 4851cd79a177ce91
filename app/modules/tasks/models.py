# Table: daily_tasks
# Concrete, mutable tasks for one user on one date. Rows with source_type
# "template" are snapshots: title/description/order are copied at materialization
# time and template_id/template_task_id are plain back-references, not foreign
# keys, so later template edits (including a task replace) never touch them.

import enum
import uuid
from datetime import date as date_type, datetime
from typing import Optional
from sqlalchemy import (
    Boolean, CheckConstraint, Date, DateTime, Index, Integer, String, Text, func,
)
from sqlalchemy.orm import Mapped, mapped_column
from app.database.session import Base


class SourceType(str, enum.Enum):
    CUSTOM = "custom"
    TEMPLATE = "template"


class DailyTask(Base):
    __tablename__ = "daily_tasks"
    __table_args__ = (
        CheckConstraint(
            "(source_type = 'custom' AND template_id IS NULL AND template_task_id IS NULL) OR "
            "(source_type = 'template' AND template_id IS NOT NULL AND template_task_id IS NOT NULL)",
            name="ck_daily_tasks_source_refs",
        ),
        Index("ix_daily_tasks_user_date", "user_id", "date"),
        Index("ix_daily_tasks_assignment", "user_id", "date", "template_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    source_type: Mapped[str] = mapped_column(String(16), default=SourceType.CUSTOM.value, nullable=False)
    template_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    template_task_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<DailyTask {self.title!r} {self.date} source={self.source_type} done={self.is_completed}>"
