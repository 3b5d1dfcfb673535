# backend/studiobook/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from pydantic import Field

from .common import Envelope


class SlotsResponse(Envelope[list[str]]):
    """Open start times ("HH:MM") in template order."""
    data: list[str] = Field(default_factory=list)
