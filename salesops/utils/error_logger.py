"""Error logging utilities for capturing exceptions with request context."""
import sys
import traceback
from typing import Optional, Dict, Any
from flask import request, has_request_context

from salesops.utils.logger import get_logger

logger = get_logger(__name__)

# Never copied into log records
SENSITIVE_KEYS = ("password", "token", "secret", "authorization")


def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value for key, value in data.items()
        if not any(marker in key.lower() for marker in SENSITIVE_KEYS)
    }


def get_request_context() -> Dict[str, Any]:
    """
    Extract request context information safely.

    Returns:
        Dictionary with method, path, endpoint, query params, request body
        and the resolved owner id, or an empty dict outside a request
    """
    if not has_request_context():
        return {}

    context = {
        "method": request.method,
        "path": request.path,
        "endpoint": request.endpoint or "unknown",
        "remote_addr": request.remote_addr,
        "user_agent": request.headers.get("User-Agent"),
    }

    if request.args:
        context["query_params"] = _redact(dict(request.args))

    if request.method in ("POST", "PUT", "PATCH") and request.is_json:
        data = request.get_json(silent=True)
        if isinstance(data, dict):
            safe_data = _redact(data)
            if safe_data:
                context["request_data"] = safe_data

    owner_id = getattr(request, "owner_id", None)
    if owner_id:
        context["owner_id"] = owner_id

    return context


def log_exception(
    exception: Exception,
    status_code: Optional[int] = None,
    additional_context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log an exception with full context including stack trace and request information.

    Args:
        exception: The exception to log
        status_code: Optional HTTP status code (for APIError)
        additional_context: Optional additional context to include in log
    """
    try:
        log_data = {
            "exception_type": type(exception).__name__,
            "exception_message": str(exception),
            "status_code": status_code,
        }

        if exception.__traceback__:
            log_data["stack_trace"] = ''.join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        request_context = get_request_context()
        if request_context:
            log_data["request"] = request_context

        if additional_context:
            log_data.update(additional_context)

        # Client errors are expected traffic; only server errors go to errors.log
        if status_code is not None and status_code < 500:
            logger.warning(
                f"Request failed: {type(exception).__name__}: {exception}",
                extra=log_data
            )
        else:
            logger.error(
                f"Exception occurred: {type(exception).__name__}: {exception}",
                extra=log_data
            )

    except Exception as log_error:
        print(
            f"CRITICAL: Failed to log exception: {log_error}",
            f"Original exception: {exception}",
            file=sys.stderr
        )


def log_error_message(
    message: str,
    status_code: Optional[int] = None,
    additional_context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log an error message (not an exception) with request context.

    Args:
        message: Error message to log
        status_code: Optional HTTP status code
        additional_context: Optional additional context to include in log
    """
    try:
        log_data = {
            "error_message": message,
            "status_code": status_code,
        }

        request_context = get_request_context()
        if request_context:
            log_data["request"] = request_context

        if additional_context:
            log_data.update(additional_context)

        logger.error(message, extra=log_data)

    except Exception as log_error:
        print(
            f"CRITICAL: Failed to log error message: {log_error}",
            f"Original message: {message}",
            file=sys.stderr
        )
