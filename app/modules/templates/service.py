from datetime import datetime, timezone
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload
from app.config.settings import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.modules.assignments.models import AssignedDay
from app.modules.tasks.models import DailyTask, SourceType
from app.modules.templates.models import DayTemplate, TemplateTask
from app.modules.templates.schemas import (
    TemplateCreate, TemplateUpdate, TemplateResponse, TemplateTaskInput,
)
from typing import List
import logging

logger = logging.getLogger(__name__)


def get_owned_template(db: Session, template_id: str, user_id: str) -> DayTemplate:
    """Load a template with its tasks, or raise NotFound if it is missing or not the caller's."""
    template = db.execute(
        select(DayTemplate)
        .options(selectinload(DayTemplate.tasks))
        .where(DayTemplate.id == template_id, DayTemplate.user_id == user_id)
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if template is None:
        raise NotFoundError("Template not found")
    return template


def build_template_tasks(tasks: List[TemplateTaskInput]) -> List[TemplateTask]:
    """Turn task input into rows. A missing order means "position in the list"."""
    rows = []
    seen_orders = set()
    for position, task in enumerate(tasks):
        order = task.order if task.order is not None else position
        if order in seen_orders:
            raise ValidationError(f"Duplicate task order {order} in template")
        seen_orders.add(order)
        rows.append(TemplateTask(title=task.title, description=task.description, order=order))
    return rows


def to_template_response(template: DayTemplate) -> TemplateResponse:
    resp = TemplateResponse.model_validate(template)
    resp.tasks.sort(key=lambda t: t.order)
    return resp


class TemplateService:
    def __init__(self, db: Session):
        self.db = db

    def list_templates(self, user_id: str) -> List[TemplateResponse]:
        """The user's templates, newest first."""
        with self.db.begin():
            templates = self.db.execute(
                select(DayTemplate)
                .options(selectinload(DayTemplate.tasks))
                .where(DayTemplate.user_id == user_id)
                .order_by(DayTemplate.created_at.desc(), DayTemplate.id)
            ).scalars().all()
            return [to_template_response(t) for t in templates]

    def get_template(self, template_id: str, user_id: str) -> TemplateResponse:
        with self.db.begin():
            return to_template_response(get_owned_template(self.db, template_id, user_id))

    def create_template(self, data: TemplateCreate, user_id: str) -> TemplateResponse:
        """Persist the template and its initial tasks in one write."""
        with self.db.begin():
            template = DayTemplate(
                user_id=user_id,
                name=data.name,
                color=data.color or settings.default_template_color,
                tasks=build_template_tasks(data.tasks),
            )
            self.db.add(template)
            self.db.flush()
            self.db.refresh(template)
            logger.info(f"Created template {template.id} ({len(template.tasks)} tasks) for user {user_id}")
            return to_template_response(template)

    def update_template(self, template_id: str, data: TemplateUpdate, user_id: str) -> TemplateResponse:
        """Update name/color; a supplied task list goes through replace_tasks semantics."""
        with self.db.begin():
            template = get_owned_template(self.db, template_id, user_id)
            if data.name is not None:
                template.name = data.name
            if data.color is not None:
                template.color = data.color
            if data.tasks is not None:
                self._replace_tasks(template, data.tasks)
            template.updated_at = datetime.now(timezone.utc)
            self.db.flush()
            return to_template_response(template)

    def replace_tasks(self, template_id: str, tasks: List[TemplateTaskInput], user_id: str) -> TemplateResponse:
        """
        Destructive resync of the template's task list.

        Every existing TemplateTask is deleted and the new list is inserted with
        fresh ids. Old task identities are discarded; tasks already materialized
        onto dates keep their (now dangling) template_task_id back-reference and
        their snapshot content.
        """
        with self.db.begin():
            template = get_owned_template(self.db, template_id, user_id)
            self._replace_tasks(template, tasks)
            template.updated_at = datetime.now(timezone.utc)
            self.db.flush()
            return to_template_response(template)

    def _replace_tasks(self, template: DayTemplate, tasks: List[TemplateTaskInput]) -> None:
        new_rows = build_template_tasks(tasks)
        template.tasks.clear()
        # Deletes must reach the database before inserts reuse (template_id, order)
        self.db.flush()
        template.tasks.extend(new_rows)
        logger.info(f"Replaced tasks of template {template.id}: {len(new_rows)} tasks")

    def delete_template(self, template_id: str, user_id: str) -> None:
        """
        Delete the template, its tasks and its ledger entries.

        Tasks it already materialized stay on their dates as custom tasks, keeping
        content and completion state.
        """
        with self.db.begin():
            template = get_owned_template(self.db, template_id, user_id)
            detached = self.db.execute(
                update(DailyTask)
                .where(
                    DailyTask.user_id == user_id,
                    DailyTask.template_id == template_id,
                    DailyTask.source_type == SourceType.TEMPLATE.value,
                )
                .values(source_type=SourceType.CUSTOM.value, template_id=None, template_task_id=None)
            ).rowcount
            removed = self.db.execute(
                delete(AssignedDay)
                .where(AssignedDay.user_id == user_id, AssignedDay.template_id == template_id)
            ).rowcount
            self.db.delete(template)
        logger.info(
            f"Deleted template {template_id} for user {user_id}: "
            f"{removed} assignments removed, {detached} tasks detached"
        )
