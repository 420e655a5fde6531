"""Application error taxonomy.

Each error is an ``HTTPException`` so services can raise it directly and
FastAPI renders ``{"detail": ...}``. The default status can be overridden per
call site where an endpoint documents a different code (e.g. a duplicate
email on registration answers 403, not 409).
"""

from typing import Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal Error"

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None, headers=None):
        super().__init__(
            status_code=status_code or self.default_status,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(AppError):
    default_status = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class NotFoundError(AppError):
    default_status = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(AppError):
    default_status = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class AuthError(AppError):
    default_status = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenError(AppError):
    default_status = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class InternalError(AppError):
    pass
