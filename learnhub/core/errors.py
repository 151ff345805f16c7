import enum
from typing import Optional

from fastapi import status


class AuthRejection(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN_ROLE = "forbidden_role"
    FORBIDDEN_OWNERSHIP = "forbidden_ownership"


class AppError(Exception):
    """Base class for errors rendered to the caller as JSON {"message", "reason"}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.reason:
            body["reason"] = self.reason
        return body


class NotAuthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, reason=AuthRejection.UNAUTHENTICATED.value)


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str, reason: AuthRejection = AuthRejection.FORBIDDEN_ROLE):
        super().__init__(message, reason=reason.value)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str):
        super().__init__(message, reason="not_found")


class ValidationConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message, reason="validation_conflict")
