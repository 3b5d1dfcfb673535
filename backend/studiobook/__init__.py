"""Photographer booking engine: weekly availability, open slots, conflict-safe bookings."""

__version__ = "0.1.0"
