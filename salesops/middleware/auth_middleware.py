"""Authentication middleware for protecting routes."""
from functools import wraps
from flask import request

from salesops.config.settings import AUTH_USER_HEADER
from salesops.utils.errors import error_response
from salesops.utils.validators import sanitize_string


def require_auth(f):
    """
    Decorator to require an authenticated caller for a route.

    The upstream auth proxy resolves the session and forwards the user's
    opaque identifier in the AUTH_USER_HEADER header. The identifier is
    attached to the request as request.owner_id.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        owner_id = sanitize_string(request.headers.get(AUTH_USER_HEADER), max_length=255, default=None)

        if not owner_id:
            return error_response("MISSING_USER", "Authentication required", 401)

        request.owner_id = owner_id

        return f(*args, **kwargs)

    return decorated_function
