from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, Optional, List
from datetime import datetime

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
TitleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
HexColor = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^#[0-9A-Fa-f]{6}$")]


class TemplateTaskInput(BaseModel):
    title: TitleStr
    description: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)


class TemplateCreate(BaseModel):
    name: NameStr
    color: Optional[HexColor] = None
    tasks: List[TemplateTaskInput] = []


class TemplateUpdate(BaseModel):
    name: Optional[NameStr] = None
    color: Optional[HexColor] = None
    # When present the task list is replaced wholesale, see TemplateService.replace_tasks
    tasks: Optional[List[TemplateTaskInput]] = None


class TemplateTasksReplace(BaseModel):
    tasks: List[TemplateTaskInput]


class TemplateTaskResponse(BaseModel):
    id: str
    template_id: str
    title: str
    description: Optional[str] = None
    order: int

    class Config:
        from_attributes = True


class TemplateResponse(BaseModel):
    id: str
    user_id: str
    name: str
    color: str
    tasks: List[TemplateTaskResponse] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TemplateSummary(BaseModel):
    """Name and color only; attached to ledger entries and task sections."""
    id: str
    name: str
    color: str

    class Config:
        from_attributes = True
