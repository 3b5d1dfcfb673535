from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Text, func, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata

ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")


class Services(Base):
    """Read-only service catalog owned by the services module."""
    __tablename__ = 'services'
    __table_args__ = (
        Index('ix_services_photographer_active', 'photographer_id', 'is_active'),
    )

    photographer_id = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
    duration_min = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    deposit_amount = Column(Float, nullable=False, server_default=text('0'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    description = Column(Text)

    bookings = relationship('Bookings', back_populates='service')


class Availability(Base):
    __tablename__ = 'availability'

    photographer_id = Column(Integer, nullable=False, unique=True)
    timezone = Column(Text, nullable=False, server_default=text("'UTC'"))
    # JSON list: [{"day": "Monday", "is_available": true, "slots": ["09:00"]}, ...]
    days = Column(Text, nullable=False, server_default=text("'[]'"))
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        # At most one active booking per photographer/day/start time.
        # Cancelled and completed rows fall out of the index.
        Index(
            'uq_bookings_active_slot',
            'photographer_id', 'date', 'time_slot',
            unique=True,
            sqlite_where=text("status IN ('pending', 'confirmed')"),
            postgresql_where=text("status IN ('pending', 'confirmed')"),
        ),
        Index('ix_bookings_photographer_status', 'photographer_id', 'status'),
    )

    photographer_id = Column(Integer, nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    client_name = Column(Text, nullable=False)
    client_email = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False)
    time_slot = Column(Text, nullable=False)  # "HH:MM"
    end_time = Column(Text, nullable=False)   # "HH:MM", fixed at creation
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    payment_status = Column(Text, nullable=False, server_default=text("'unpaid'"))
    id = Column(Integer, primary_key=True)
    client_phone = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    service = relationship('Services', back_populates='bookings')
