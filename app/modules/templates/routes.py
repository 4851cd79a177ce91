from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database.session import get_db
from app.modules.templates.schemas import (
    TemplateCreate, TemplateUpdate, TemplateResponse, TemplateTasksReplace,
)
from app.modules.templates.service import TemplateService
from app.core.dependencies import get_current_user_id
from typing import List

router = APIRouter(prefix="/templates", tags=["templates"])


def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    return TemplateService(db)


@router.get("", response_model=List[TemplateResponse])
def list_templates(
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """List the caller's day templates, newest first."""
    return service.list_templates(user_id)


@router.post("", response_model=TemplateResponse, status_code=201)
def create_template(
    template_data: TemplateCreate,
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """Create a day template together with its checklist."""
    return service.create_template(template_data, user_id)


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    return service.get_template(template_id, user_id)


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: str,
    template_data: TemplateUpdate,
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """
    Update name/color. Sending ``tasks`` replaces the whole checklist
    (same semantics as PUT /templates/{id}/tasks).
    """
    return service.update_template(template_id, template_data, user_id)


@router.put("/{template_id}/tasks", response_model=TemplateResponse)
def replace_template_tasks(
    template_id: str,
    data: TemplateTasksReplace,
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """Replace the checklist. Existing task ids are discarded; already assigned days keep their copies."""
    return service.replace_tasks(template_id, data.tasks, user_id)


@router.delete("/{template_id}", status_code=204)
def delete_template(
    template_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TemplateService = Depends(get_template_service),
):
    service.delete_template(template_id, user_id)
    return None
