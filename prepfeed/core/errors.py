from fastapi import HTTPException, status
from typing import Dict, Any, Optional

class APIError(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str = None,
        metadata: Dict[str, Any] = None
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "message": detail,
                "error_code": error_code or "UNKNOWN_ERROR",
                "metadata": metadata or {}
            }
        )

class AuthenticationError(APIError):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="AUTHENTICATION_FAILED"
        )
        self.headers = {"WWW-Authenticate": "Bearer"}


class PrepFeedError(Exception):
    """Base class for errors raised by the recommendation and tracking services.

    These are plain exceptions so the services stay usable outside a request;
    ``prepfeed.main`` maps them onto HTTP responses.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "UNKNOWN_ERROR"

    def __init__(self, message: str, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_detail(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "error_code": self.error_code,
            "metadata": self.metadata,
        }

class NotFoundError(PrepFeedError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any, message: Optional[str] = None):
        super().__init__(
            message or f"{resource} with id {resource_id} not found",
            metadata={"resource": resource, "id": resource_id}
        )

class ForbiddenError(PrepFeedError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "RESOURCE_FORBIDDEN"

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} with id {resource_id} belongs to another user",
            metadata={"resource": resource, "id": resource_id}
        )

class ProfileRequiredError(PrepFeedError):
    status_code = status.HTTP_428_PRECONDITION_REQUIRED
    error_code = "PROFILE_REQUIRED"

    def __init__(self, user_id: str):
        super().__init__(
            "A profile with a target exam is required to generate recommendations",
            metadata={"user_id": user_id}
        )

class ValidationError(PrepFeedError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = "VALIDATION_FAILED"

    def __init__(self, detail: str = "Validation failed", field: Optional[str] = None):
        super().__init__(detail, metadata={"field": field} if field else None)
