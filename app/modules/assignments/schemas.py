from pydantic import BaseModel
from datetime import date as date_type, datetime
from app.modules.templates.schemas import TemplateSummary


class AssignmentRequest(BaseModel):
    date: date_type


class AssignedDayResponse(BaseModel):
    id: str
    user_id: str
    date: date_type
    template_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class AssignedDayWithTemplate(AssignedDayResponse):
    template: TemplateSummary


class AssignmentResult(AssignedDayResponse):
    """Ledger entry plus how many tasks were materialized with it."""
    materialized_task_count: int = 0
