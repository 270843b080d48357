"""Reservation model and its state machine"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from ratingeats.database import Base


class ReservationState(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# target state -> states it may be reached from
RESERVATION_TRANSITIONS = {
    ReservationState.CONFIRMED: (ReservationState.PENDING,),
    ReservationState.REJECTED: (ReservationState.PENDING,),
    ReservationState.COMPLETED: (ReservationState.CONFIRMED,),
    ReservationState.CANCELLED: (ReservationState.PENDING, ReservationState.CONFIRMED),
}


def can_transition(current: ReservationState, target: ReservationState) -> bool:
    """Check whether a reservation may move from current to target"""
    return current in RESERVATION_TRANSITIONS.get(target, ())


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Customer information
    customer_name = Column(String(255), nullable=False)
    phone_number = Column(String(20), nullable=False)

    # Reservation details
    date_reservation = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    number_of_guests = Column(Integer, nullable=False)

    # Status
    state = Column(Enum(ReservationState), nullable=False, default=ReservationState.PENDING)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", lazy="joined")
