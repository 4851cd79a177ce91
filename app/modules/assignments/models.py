# Table: assigned_days
# The ledger: one row per (user_id, date, template_id). The unique constraint is
# the only concurrency control for assign/unassign; keep it at the database level.

import uuid
from datetime import date as date_type, datetime
from sqlalchemy import Date, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database.session import Base
from app.modules.templates.models import DayTemplate


class AssignedDay(Base):
    __tablename__ = "assigned_days"
    __table_args__ = (
        UniqueConstraint("user_id", "date", "template_id", name="uq_assigned_days_user_date_template"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    template_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("day_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    template: Mapped[DayTemplate] = relationship()

    def __repr__(self) -> str:  # pragma: no cover
        return f"<AssignedDay user={self.user_id} date={self.date} template={self.template_id}>"
