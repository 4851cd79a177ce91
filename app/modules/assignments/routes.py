from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database.session import get_db
from app.modules.assignments.schemas import AssignmentRequest, AssignmentResult
from app.modules.assignments.service import AssignmentService
from app.core.dependencies import get_current_user_id

router = APIRouter(prefix="/templates", tags=["assignments"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)


@router.post("/{template_id}/assign", response_model=AssignmentResult, status_code=201)
def assign_template(
    template_id: str,
    data: AssignmentRequest,
    user_id: str = Depends(get_current_user_id),
    service: AssignmentService = Depends(get_assignment_service),
):
    """
    Assign a template to a date and copy its tasks onto that date.
    409 ``already_assigned`` means the assignment already exists; refresh instead of retrying.
    """
    return service.assign_template(template_id, data.date, user_id)


@router.post("/{template_id}/unassign", status_code=204)
def unassign_template(
    template_id: str,
    data: AssignmentRequest,
    user_id: str = Depends(get_current_user_id),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Remove a template from a date along with the tasks it created there."""
    service.unassign_template(template_id, data.date, user_id)
    return None
