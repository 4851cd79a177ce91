# Tables: day_templates, template_tasks
# A template is a reusable, named checklist; its tasks are pure definitions and
# are never completed themselves (see app.modules.tasks for the per-day copies).

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database.session import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class DayTemplate(Base):
    __tablename__ = "day_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    color: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    tasks: Mapped[List["TemplateTask"]] = relationship(
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateTask.order",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<DayTemplate {self.name} ({len(self.tasks)} tasks)>"


class TemplateTask(Base):
    __tablename__ = "template_tasks"
    __table_args__ = (
        UniqueConstraint("template_id", "order", name="uq_template_tasks_template_order"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    template_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("day_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    template: Mapped[DayTemplate] = relationship(back_populates="tasks")
