"""Error handling utilities."""
from typing import Dict, Any, Optional
from flask import jsonify


class APIError(Exception):
    """
    Custom exception for API errors.
    Can be raised in route handlers and will be caught by error handler.
    """
    def __init__(self, message: str, status_code: int = 400, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.code = code or "API_ERROR"
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary format."""
        error_dict = {
            "error": {
                "code": self.code,
                "message": self.message
            }
        }
        if self.details:
            error_dict["error"]["details"] = self.details
        return error_dict


class ValidationError(APIError):
    """Malformed or missing required input."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, code="VALIDATION_ERROR", details=details)


class NotFoundError(APIError):
    """
    Requested record does not exist for the caller's owner.
    Raised identically whether the row is absent or owned by someone else.
    """
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404, code="NOT_FOUND")


class PreconditionFailed(APIError):
    """Operation not allowed in the record's current state."""
    def __init__(self, message: str):
        super().__init__(message, status_code=400, code="PRECONDITION_FAILED")


class ConflictError(APIError):
    """Uniqueness violation, e.g. two requests drawing the same document number."""
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")


class InternalError(APIError):
    """Unexpected storage failure; the operation did not happen."""
    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message, status_code=500, code="INTERNAL_ERROR")


def error_response(code: str, message: str, status_code: int = 400, details: Optional[Dict[str, Any]] = None) -> tuple:
    """
    Create standardized error response.

    Args:
        code: Error code (e.g., "MISSING_USER")
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details

    Returns:
        Tuple of (response, status_code) for Flask
    """
    response = {
        "error": {
            "code": code,
            "message": message
        }
    }

    if details:
        response["error"]["details"] = details

    return jsonify(response), status_code


def success_response(data: Any, status_code: int = 200, metadata: Optional[Dict[str, Any]] = None) -> tuple:
    """
    Create standardized success response.

    Args:
        data: Response data
        status_code: HTTP status code
        metadata: Optional metadata (filters, counts, etc.)

    Returns:
        Tuple of (response, status_code) for Flask
    """
    response = {"success": True, "data": data}

    if metadata:
        response["metadata"] = metadata

    return jsonify(response), status_code
