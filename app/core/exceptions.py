"""
Typed outcomes raised by the services.

They are HTTPExceptions so the routes need no translation layer; the handler
registered in app.main adds the machine-readable ``code`` to the response body.
"""

from fastapi import HTTPException, status


class CareTrackerError(HTTPException):
    code = "error"
    status_code_default = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code_default, detail=detail)


class NotFoundError(CareTrackerError):
    """Missing, or owned by someone else. The two cases are deliberately indistinguishable."""
    code = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND


class AlreadyAssignedError(CareTrackerError):
    code = "already_assigned"
    status_code_default = status.HTTP_409_CONFLICT


class NotAssignedError(CareTrackerError):
    code = "not_assigned"
    status_code_default = status.HTTP_404_NOT_FOUND


class ValidationError(CareTrackerError):
    code = "validation_error"
    status_code_default = status.HTTP_422_UNPROCESSABLE_ENTITY
