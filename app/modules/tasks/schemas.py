from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, Optional, List
from datetime import date as date_type, datetime
from app.modules.templates.schemas import TemplateSummary

TitleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class TaskCreate(BaseModel):
    date: date_type
    title: TitleStr
    description: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)


class TaskUpdate(BaseModel):
    title: Optional[TitleStr] = None
    description: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_completed: Optional[bool] = None


class DailyTaskResponse(BaseModel):
    id: str
    user_id: str
    date: date_type
    title: str
    description: Optional[str] = None
    is_completed: bool
    order: int
    source_type: str
    template_id: Optional[str] = None
    template_task_id: Optional[str] = None
    template: Optional[TemplateSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskSection(BaseModel):
    key: str
    title: str
    source_type: str
    template_id: Optional[str] = None
    color: Optional[str] = None
    tasks: List[DailyTaskResponse] = []
