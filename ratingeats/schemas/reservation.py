"""Reservation schemas"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from ratingeats.models.reservation import ReservationState
from ratingeats.schemas.restaurant import RestaurantSummary
from ratingeats.schemas.validators import CustomerName, PhoneNumber, TimeOfDay


class ReservationCreate(BaseModel):
    """Create reservation request"""
    restaurant_id: UUID
    date_reservation: date
    time: TimeOfDay
    number_of_guests: int = Field(ge=1)
    customer_name: CustomerName
    phone_number: PhoneNumber


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    restaurant_id: UUID
    user_id: UUID
    date_reservation: date
    time: str
    number_of_guests: int
    customer_name: str
    phone_number: str
    state: ReservationState
    restaurant: Optional[RestaurantSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationTransitionResponse(BaseModel):
    """Result of a state transition"""
    message: str
    reservation: ReservationResponse
