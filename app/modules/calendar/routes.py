from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database.session import get_db
from app.modules.assignments.schemas import AssignedDayWithTemplate
from app.modules.calendar.schemas import CalendarMarkers
from app.modules.calendar.service import CalendarService
from app.modules.templates.schemas import TemplateResponse
from app.core.dependencies import get_current_user_id
from typing import List

# Shares the /templates prefix; app.main mounts this router before the
# templates router so these paths win over /templates/{template_id}.
router = APIRouter(prefix="/templates", tags=["calendar"])


def get_calendar_service(db: Session = Depends(get_db)) -> CalendarService:
    return CalendarService(db)


@router.get("/assigned-days", response_model=List[AssignedDayWithTemplate])
def list_assigned_days(
    start_date: date,
    end_date: date,
    user_id: str = Depends(get_current_user_id),
    service: CalendarService = Depends(get_calendar_service),
):
    """Template assignments (with name/color) between start_date and end_date inclusive."""
    return service.list_assigned_range(user_id, start_date, end_date)


@router.get("/assigned-days/markers", response_model=CalendarMarkers)
def get_calendar_markers(
    start_date: date,
    end_date: date,
    user_id: str = Depends(get_current_user_id),
    service: CalendarService = Depends(get_calendar_service),
):
    """Per-day indicator dots for the calendar view."""
    return service.get_markers(user_id, start_date, end_date)


@router.get("/available", response_model=List[TemplateResponse])
def list_available_templates(
    date: date,
    user_id: str = Depends(get_current_user_id),
    service: CalendarService = Depends(get_calendar_service),
):
    """Templates that can still be assigned to the given date."""
    return service.list_available_templates(user_id, date)
