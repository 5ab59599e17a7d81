"""
Error taxonomy for the trash lifecycle.

Routes translate these into HTTP responses; services raise them.
"Already deleted" is not an error: soft delete returns the existing record
with a flag instead.
"""
from fastapi import status


class LifecycleError(Exception):
    """Base lifecycle error."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFoundError(LifecycleError):
    """Raised when a job, company or trash record id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND


class LifecycleValidationError(LifecycleError):
    """Raised when a required identifier (userId, jobId) is missing or blank."""

    status_code = status.HTTP_400_BAD_REQUEST


class ApplicationConflictError(LifecycleError):
    """Raised when a user already holds an application for a job."""

    status_code = status.HTTP_409_CONFLICT


class StoreUnavailableError(LifecycleError):
    """Raised when the underlying database call fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
