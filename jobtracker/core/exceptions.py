from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class FormValidationError(AppException):
    """
    Client-side form validation failure, raised before any network call.
    Named FormValidationError to avoid shadowing pydantic's ValidationError.
    """
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(
            message="; ".join(f"{field}: {msg}" for field, msg in self.errors.items()),
            status_code=422,
            error_code="VALIDATION_FAILED",
            details={"errors": self.errors}
        )

class RequestError(AppException):
    """
    Non-2xx response or transport failure from the persistence client.
    status_code is None when the request never produced a response.
    """
    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code="REQUEST_FAILED",
            details={"body": body} if body is not None else None
        )
        self.body = body

class WorkflowStateError(AppException):
    def __init__(self, workflow: str, current: Any, target: Any):
        super().__init__(
            message=f"{workflow}: cannot move from '{current}' to '{target}'",
            status_code=409,
            error_code="INVALID_TRANSITION"
        )
        self.current = current
        self.target = target

class JobNotFoundError(AppException):
    def __init__(self, job_id: int):
        super().__init__(
            message=f"Job {job_id} not found",
            status_code=404,
            error_code="JOB_NOT_FOUND"
        )
