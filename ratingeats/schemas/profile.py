"""Profile schemas"""

from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from ratingeats.models.business_user import BusinessRole
from ratingeats.schemas.restaurant import RestaurantSummary
from ratingeats.schemas.validators import PersonName, LastName, Username


class ProfileUpdate(BaseModel):
    """Editable profile fields"""
    name: Optional[PersonName] = None
    last_name: Optional[LastName] = None
    username: Optional[Username] = None
    biography: Optional[str] = Field(None, max_length=500)


class ProfileResponse(BaseModel):
    """Own profile, including followed restaurants"""
    id: UUID
    name: str
    last_name: str
    email: str
    username: str
    biography: Optional[str]
    favorite_restaurant_ids: List[UUID] = []


class MyRestaurant(BaseModel):
    """A restaurant the caller is staff of"""
    business_user_id: UUID
    role: BusinessRole
    restaurant: RestaurantSummary
