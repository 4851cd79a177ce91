from datetime import date
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload
from app.config.settings import settings
from app.core.dates import as_day
from app.core.exceptions import ValidationError
from app.modules.assignments.models import AssignedDay
from app.modules.assignments.schemas import AssignedDayWithTemplate
from app.modules.calendar.schemas import CalendarMarkers, DayMarker
from app.modules.templates.models import DayTemplate
from app.modules.templates.schemas import TemplateResponse
from app.modules.templates.service import to_template_response
from typing import List, Sequence


def build_day_markers(assigned_days: Sequence[AssignedDayWithTemplate]) -> CalendarMarkers:
    """Group ledger entries into per-day markers, keeping their order within each day."""
    markers = CalendarMarkers()
    for assigned in assigned_days:
        markers.days.setdefault(assigned.date.isoformat(), []).append(DayMarker(
            template_id=assigned.template_id,
            name=assigned.template.name,
            color=assigned.template.color,
        ))
    return markers


class CalendarService:
    """Read-only views over the assignment ledger."""

    def __init__(self, db: Session):
        self.db = db

    def list_assigned_range(self, user_id: str, start_date: date, end_date: date) -> List[AssignedDayWithTemplate]:
        """
        Ledger entries with template name/color for an inclusive date range.

        Reads the ledger only: a day whose materialized tasks were all deleted
        still shows as assigned.
        """
        start_date, end_date = as_day(start_date), as_day(end_date)
        if start_date > end_date:
            raise ValidationError("start_date must not be after end_date")
        if (end_date - start_date).days + 1 > settings.max_range_days:
            raise ValidationError(f"Date range may span at most {settings.max_range_days} days")
        with self.db.begin():
            rows = self.db.execute(
                select(AssignedDay)
                .options(joinedload(AssignedDay.template))
                .where(
                    AssignedDay.user_id == user_id,
                    AssignedDay.date >= start_date,
                    AssignedDay.date <= end_date,
                )
                .order_by(AssignedDay.date, AssignedDay.created_at, AssignedDay.id)
            ).scalars().all()
            return [AssignedDayWithTemplate.model_validate(row) for row in rows]

    def get_markers(self, user_id: str, start_date: date, end_date: date) -> CalendarMarkers:
        return build_day_markers(self.list_assigned_range(user_id, start_date, end_date))

    def list_available_templates(self, user_id: str, day: date) -> List[TemplateResponse]:
        """The user's templates that are not yet assigned to ``day``."""
        day = as_day(day)
        with self.db.begin():
            assigned_ids = (
                select(AssignedDay.template_id)
                .where(AssignedDay.user_id == user_id, AssignedDay.date == day)
            )
            templates = self.db.execute(
                select(DayTemplate)
                .options(selectinload(DayTemplate.tasks))
                .where(DayTemplate.user_id == user_id, DayTemplate.id.not_in(assigned_ids))
                .order_by(DayTemplate.created_at.desc(), DayTemplate.id)
            ).scalars().all()
            return [to_template_response(t) for t in templates]
