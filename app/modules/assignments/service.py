"""
Assigning day templates to dates.

Assigning a template writes one ledger row (AssignedDay) and materializes the
template's current tasks as DailyTask snapshots for that date. Unassigning
removes the ledger row and exactly the rows it materialized. Both happen in a
single transaction, so readers see either both or neither.
"""

from datetime import date
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.dates import as_day
from app.core.exceptions import AlreadyAssignedError, NotAssignedError
from app.modules.assignments.models import AssignedDay
from app.modules.assignments.schemas import AssignmentResult
from app.modules.tasks.models import DailyTask, SourceType
from app.modules.templates.models import DayTemplate
from app.modules.templates.service import get_owned_template
from typing import List
import logging

logger = logging.getLogger(__name__)


def materialize_tasks(template: DayTemplate, day: date, user_id: str) -> List[DailyTask]:
    """Snapshot the template's current tasks as fresh, incomplete tasks for one day."""
    return [
        DailyTask(
            user_id=user_id,
            date=day,
            title=task.title,
            description=task.description,
            order=task.order,
            is_completed=False,
            source_type=SourceType.TEMPLATE.value,
            template_id=template.id,
            template_task_id=task.id,
        )
        for task in sorted(template.tasks, key=lambda t: t.order)
    ]


class AssignmentService:
    def __init__(self, db: Session):
        self.db = db

    def assign_template(self, template_id: str, day: date, user_id: str) -> AssignmentResult:
        """
        Mark the template active on ``day`` and copy its tasks onto that day.

        Raises NotFoundError when the template is missing or not the caller's and
        AlreadyAssignedError when the (user, date, template) ledger entry exists.
        An AlreadyAssignedError means the request is already satisfied; do not retry.
        A template without tasks still produces the ledger entry.
        """
        day = as_day(day)
        with self.db.begin():
            template = get_owned_template(self.db, template_id, user_id)
            assigned = AssignedDay(user_id=user_id, date=day, template_id=template.id)
            self.db.add(assigned)
            try:
                self.db.flush()
            except IntegrityError as e:
                logger.info(f"Template {template_id} already assigned to {day} for user {user_id}")
                raise AlreadyAssignedError("Template already assigned to this date") from e

            tasks = materialize_tasks(template, day, user_id)
            self.db.add_all(tasks)
            self.db.flush()
            self.db.refresh(assigned)
            result = AssignmentResult.model_validate(assigned)
            result.materialized_task_count = len(tasks)

        logger.info(
            f"Assigned template {template_id} to {day} for user {user_id} "
            f"({result.materialized_task_count} tasks materialized)"
        )
        return result

    def unassign_template(self, template_id: str, day: date, user_id: str) -> None:
        """
        Remove the ledger entry and the tasks this assignment materialized.

        Custom tasks and tasks from other templates on the same day are left alone.
        Raises NotAssignedError (and changes nothing) when there is no ledger entry.
        """
        day = as_day(day)
        with self.db.begin():
            get_owned_template(self.db, template_id, user_id)
            removed = self.db.execute(
                delete(AssignedDay)
                .where(
                    AssignedDay.user_id == user_id,
                    AssignedDay.date == day,
                    AssignedDay.template_id == template_id,
                )
            ).rowcount
            if not removed:
                raise NotAssignedError("Template is not assigned to this date")

            deleted_tasks = self.db.execute(
                delete(DailyTask)
                .where(
                    DailyTask.user_id == user_id,
                    DailyTask.date == day,
                    DailyTask.template_id == template_id,
                    DailyTask.source_type == SourceType.TEMPLATE.value,
                )
            ).rowcount

        logger.info(
            f"Unassigned template {template_id} from {day} for user {user_id} "
            f"({deleted_tasks} tasks removed)"
        )
