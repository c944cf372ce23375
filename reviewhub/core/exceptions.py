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

class InvalidInputError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details
        )

class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class ConflictError(AppException):
    def __init__(self, message: str, error_code: str = "CONFLICT", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            details=details
        )

class DuplicateReportError(ConflictError):
    """Raised when the store already holds a report for the (employee, month) pair."""
    def __init__(self, employee_id: int, month: str):
        self.employee_id = employee_id
        self.month = month
        super().__init__(
            message=f"A report for employee {employee_id} in {month} already exists",
            error_code="DUPLICATE_REPORT",
            details={"employee_id": employee_id, "month": month}
        )

class DepartmentInUseError(ConflictError):
    def __init__(self, name: str):
        super().__init__(
            message=f"Department '{name}' is assigned to at least one employee",
            error_code="DEPARTMENT_IN_USE",
            details={"department": name}
        )

class AIError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="AI_SERVICE_UNAVAILABLE",
            details=details
        )

class MalformedAIResponseError(AIError):
    """The model answered, but not with the JSON object we asked for."""
    def __init__(self, reason: str):
        super().__init__(message=f"Malformed AI response: {reason}")
        self.status_code = 502
        self.error_code = "MALFORMED_AI_RESPONSE"

class AIKillSwitchError(AppException):
    def __init__(self):
        super().__init__(
            message="AI services are currently offline for maintenance.",
            status_code=503,
            error_code="AI_KILL_SWITCH_ACTIVE"
        )

class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )

class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
