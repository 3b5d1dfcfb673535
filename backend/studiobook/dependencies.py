# backend/studiobook/dependencies.py
"""
Request identity.

Authentication happens upstream: the gateway verifies the session and
forwards the photographer's id in X-Photographer-Id. Public routes do not
depend on it.
"""

from typing import Optional

from fastapi import Header

from .services.errors import AuthenticationError


def get_photographer_id(
    x_photographer_id: Optional[str] = Header(None),
) -> int:
    if not x_photographer_id:
        raise AuthenticationError("Not authorized, no identity")
    try:
        photographer_id = int(x_photographer_id)
    except ValueError:
        raise AuthenticationError("Not authorized, malformed identity") from None
    if photographer_id <= 0:
        raise AuthenticationError("Not authorized, malformed identity")
    return photographer_id
