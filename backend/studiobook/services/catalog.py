"""
Service catalog lookup.

The catalog itself is managed elsewhere; the booking engine only reads
duration, activation flag and the fields it shows back to clients.
"""

from sqlalchemy.orm import Session

from ..models.generated import Services


def find_service(
    db: Session,
    service_id: int,
    photographer_id: int | None = None,
) -> Services | None:
    """Get an active service by ID, optionally only if the photographer offers it."""
    query = db.query(Services).filter(
        Services.id == service_id,
        Services.is_active == 1
    )
    if photographer_id is not None:
        query = query.filter(Services.photographer_id == photographer_id)
    return query.first()
