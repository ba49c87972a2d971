"""
Error taxonomy for the job board core.

Every service operation fails with exactly one of these. The HTTP layer maps
them to status codes in one place (see app.main).
"""
from fastapi import status


class JobBoardError(Exception):
    """Base class for errors raised by the core."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(JobBoardError):
    """Referenced job or application does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class Forbidden(JobBoardError):
    """Principal is authenticated but the action is denied."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized to perform this action"


class Conflict(JobBoardError):
    """Duplicate resource, e.g. a second application for the same job."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class InvalidArgument(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument"


class Unavailable(JobBoardError):
    """The database failed. Not retried here."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable"


class AuthenticationError(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid token"
