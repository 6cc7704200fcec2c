"""Data validation utilities for database operations."""
import math
from datetime import date, datetime
from typing import Any, Optional

from salesops.utils.errors import ValidationError


def sanitize_string(value: Any, max_length: int, default: Optional[str] = "") -> Optional[str]:
    """
    Sanitize string value for database storage.

    Args:
        value: Value to sanitize
        max_length: Maximum allowed length
        default: Default value if value is invalid

    Returns:
        Sanitized string
    """
    if value is None:
        return default

    # Convert to string
    str_value = str(value).strip()

    # Truncate if too long
    if len(str_value) > max_length:
        str_value = str_value[:max_length]

    # Return default if empty
    if not str_value:
        return default

    return str_value


def require_string(value: Any, field: str, max_length: int = 255) -> str:
    """Sanitize a mandatory string, raising ValidationError if it ends up empty."""
    str_value = sanitize_string(value, max_length=max_length, default=None)
    if str_value is None:
        raise ValidationError(f"{field} is required", details={"field": field})
    return str_value


def parse_float(value: Any, field: str, min_value: Optional[float] = None,
                max_value: Optional[float] = None) -> float:
    """
    Coerce a value to float, rejecting anything that is not a finite number.

    Args:
        value: Value to coerce (number or numeric string)
        field: Field name used in the error message
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)

    Returns:
        Parsed float

    Raises:
        ValidationError: If the value is missing, non-numeric, NaN/Infinity or out of bounds
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", details={"field": field})

    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(f"{field} must be a number", details={"field": field})

    if math.isnan(float_value) or math.isinf(float_value):
        raise ValidationError(f"{field} must be a finite number", details={"field": field})

    if min_value is not None and float_value < min_value:
        raise ValidationError(f"{field} must be >= {min_value}", details={"field": field})

    if max_value is not None and float_value > max_value:
        raise ValidationError(f"{field} must be <= {max_value}", details={"field": field})

    return float_value


def parse_int(value: Any, field: str, min_value: Optional[int] = None) -> int:
    """
    Coerce a value to int. Whole floats ("2", 2.0) are accepted, fractions are not.

    Raises:
        ValidationError: If the value is not a whole number or is below min_value
    """
    float_value = parse_float(value, field)
    if not float_value.is_integer():
        raise ValidationError(f"{field} must be a whole number", details={"field": field})

    int_value = int(float_value)
    if min_value is not None and int_value < min_value:
        raise ValidationError(f"{field} must be >= {min_value}", details={"field": field})
    return int_value


def coerce_id(value: Any) -> Optional[int]:
    """
    Coerce a surrogate id taken from a URL or caller.

    Returns:
        Positive int, or None if the value cannot identify a row
    """
    if isinstance(value, bool):
        return None
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return None
    return int_value if int_value > 0 else None


def parse_date(value: Any, field: str) -> Optional[date]:
    """
    Parse an optional YYYY-MM-DD date.

    Returns:
        date instance, or None for None/empty input
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format", details={"field": field})


def validate_status(status: str, allowed: tuple, entity: str) -> str:
    """
    Validate a status against an entity's closed status set.

    Args:
        status: Status to validate
        allowed: Allowed statuses for the entity
        entity: Entity name used in the error message

    Returns:
        The status, unchanged
    """
    if status not in allowed:
        raise ValidationError(
            f"Invalid {entity} status: {status}. Must be one of: {', '.join(allowed)}",
            details={"field": "status"}
        )
    return status
