from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database.session import get_db
from app.modules.tasks.schemas import DailyTaskResponse, TaskCreate, TaskUpdate, TaskSection
from app.modules.tasks.service import TaskService
from app.core.dependencies import get_current_user_id
from typing import List

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=List[DailyTaskResponse])
def list_tasks(
    date: date,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """All tasks for a date (YYYY-MM-DD): custom first, then template tasks."""
    return service.list_tasks_for_date(user_id, date)


@router.get("/sections", response_model=List[TaskSection])
def list_task_sections(
    date: date,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Tasks for a date grouped into display sections."""
    return service.list_sections(user_id, date)


@router.post("", response_model=DailyTaskResponse, status_code=201)
def create_task(
    task_data: TaskCreate,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(task_data, user_id)


@router.get("/{task_id}", response_model=DailyTaskResponse)
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return service.get_task(task_id, user_id)


@router.put("/{task_id}", response_model=DailyTaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return service.update_task(task_id, task_data, user_id)


@router.patch("/{task_id}/toggle", response_model=DailyTaskResponse)
def toggle_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Flip a task between done and not done."""
    return service.toggle_complete(task_id, user_id)


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    service.delete_task(task_id, user_id)
    return None
