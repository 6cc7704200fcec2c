"""Helpers for reading the authenticated caller from the request context."""
from typing import Optional
from flask import request


def get_owner_id_from_request() -> Optional[str]:
    """
    Get the owner id resolved by require_auth.

    Returns:
        str: Owner identifier, or None outside an authenticated request
    """
    return getattr(request, "owner_id", None)
