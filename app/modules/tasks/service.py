from datetime import date
from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session
from app.config.settings import settings
from app.core.dates import as_day
from app.core.exceptions import NotFoundError
from app.modules.tasks.grouping import group_tasks_for_display
from app.modules.tasks.models import DailyTask, SourceType
from app.modules.tasks.schemas import DailyTaskResponse, TaskCreate, TaskUpdate, TaskSection
from app.modules.templates.models import DayTemplate
from app.modules.templates.schemas import TemplateSummary
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

# Declared list order: custom tasks first, then template tasks grouped by
# template name, each group with open tasks before completed ones, then by
# stored order.
SOURCE_RANK = case((DailyTask.source_type == SourceType.CUSTOM.value, 0), else_=1)


def to_task_response(task: DailyTask, template: Optional[DayTemplate] = None) -> DailyTaskResponse:
    resp = DailyTaskResponse.model_validate(task)
    if template is not None:
        resp.template = TemplateSummary.model_validate(template)
    return resp


class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def _get_owned_task(self, task_id: str, user_id: str) -> DailyTask:
        task = self.db.execute(
            select(DailyTask).where(DailyTask.id == task_id, DailyTask.user_id == user_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def _template_for(self, task: DailyTask) -> Optional[DayTemplate]:
        if task.template_id is None:
            return None
        return self.db.execute(
            select(DayTemplate).where(DayTemplate.id == task.template_id, DayTemplate.user_id == task.user_id)
        ).scalar_one_or_none()

    def list_tasks_for_date(self, user_id: str, day: date) -> List[DailyTaskResponse]:
        """All tasks of the day, custom and template-origin, with template name/color attached."""
        day = as_day(day)
        with self.db.begin():
            rows = self.db.execute(
                select(DailyTask, DayTemplate)
                .outerjoin(
                    DayTemplate,
                    and_(DayTemplate.id == DailyTask.template_id, DayTemplate.user_id == DailyTask.user_id),
                )
                .where(DailyTask.user_id == user_id, DailyTask.date == day)
                .order_by(
                    SOURCE_RANK,
                    DayTemplate.name,
                    DailyTask.template_id,
                    DailyTask.is_completed,
                    DailyTask.order,
                    DailyTask.created_at,
                    DailyTask.id,
                )
                .execution_options(populate_existing=True)
            ).all()
            return [to_task_response(task, template) for task, template in rows]

    def list_sections(self, user_id: str, day: date) -> List[TaskSection]:
        return group_tasks_for_display(
            self.list_tasks_for_date(user_id, day),
            custom_title=settings.custom_section_title,
        )

    def get_task(self, task_id: str, user_id: str) -> DailyTaskResponse:
        with self.db.begin():
            task = self._get_owned_task(task_id, user_id)
            return to_task_response(task, self._template_for(task))

    def create_task(self, data: TaskCreate, user_id: str) -> DailyTaskResponse:
        """Create a custom task. Without an explicit order it goes after the day's other custom tasks."""
        day = as_day(data.date)
        with self.db.begin():
            order = data.order
            if order is None:
                last = self.db.execute(
                    select(func.max(DailyTask.order)).where(
                        DailyTask.user_id == user_id,
                        DailyTask.date == day,
                        DailyTask.source_type == SourceType.CUSTOM.value,
                    )
                ).scalar()
                order = 0 if last is None else last + 1
            task = DailyTask(
                user_id=user_id,
                date=day,
                title=data.title,
                description=data.description,
                order=order,
                is_completed=False,
                source_type=SourceType.CUSTOM.value,
            )
            self.db.add(task)
            self.db.flush()
            self.db.refresh(task)
            return to_task_response(task)

    def update_task(self, task_id: str, data: TaskUpdate, user_id: str) -> DailyTaskResponse:
        with self.db.begin():
            task = self._get_owned_task(task_id, user_id)
            changes = data.model_dump(exclude_unset=True)
            for field in ("title", "order", "is_completed"):
                if changes.get(field) is not None:
                    setattr(task, field, changes[field])
            # description may be cleared explicitly with null
            if "description" in changes:
                task.description = changes["description"]
            self.db.flush()
            self.db.refresh(task)
            return to_task_response(task, self._template_for(task))

    def toggle_complete(self, task_id: str, user_id: str) -> DailyTaskResponse:
        """Flip completion. The ledger and template definitions are never touched."""
        with self.db.begin():
            task = self._get_owned_task(task_id, user_id)
            task.is_completed = not task.is_completed
            self.db.flush()
            self.db.refresh(task)
            return to_task_response(task, self._template_for(task))

    def delete_task(self, task_id: str, user_id: str) -> None:
        """
        Delete one task of any origin.

        Deleting a template-origin task leaves its assignment in place; the day
        stays assigned with one checklist step pruned.
        """
        with self.db.begin():
            task = self._get_owned_task(task_id, user_id)
            self.db.delete(task)
        logger.info(f"Deleted task {task_id} ({task.source_type}) for user {user_id}")
