"""Utility functions package."""
from salesops.utils.errors import (
    APIError,
    ValidationError,
    NotFoundError,
    PreconditionFailed,
    ConflictError,
    InternalError,
    error_response,
    success_response
)
from salesops.utils.validators import (
    sanitize_string,
    require_string,
    parse_float,
    parse_int,
    coerce_id,
    parse_date,
    validate_status
)

__all__ = [
    "APIError",
    "ValidationError",
    "NotFoundError",
    "PreconditionFailed",
    "ConflictError",
    "InternalError",
    "error_response",
    "success_response",
    "sanitize_string",
    "require_string",
    "parse_float",
    "parse_int",
    "coerce_id",
    "parse_date",
    "validate_status"
]
