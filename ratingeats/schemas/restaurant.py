"""Restaurant schemas"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from ratingeats.models.business_user import BusinessRole
from ratingeats.schemas.validators import Categories, GeoLocation, PhoneNumber


class RestaurantImageResponse(BaseModel):
    """Gallery or banner image"""
    id: UUID
    url: str
    alt: Optional[str]
    is_header: bool
    uploaded_at: datetime

    class Config:
        from_attributes = True


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=10, max_length=500)
    address: str = Field(min_length=5, max_length=200)
    categories: Categories
    geo_location: GeoLocation
    schedule: str = Field(min_length=3, max_length=200)
    capacity: int = Field(ge=1, le=150)
    email: EmailStr
    phone_number: PhoneNumber


class RestaurantUpdate(BaseModel):
    """Update restaurant request, only changed fields are applied"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    address: Optional[str] = Field(None, min_length=5, max_length=200)
    categories: Optional[Categories] = None
    schedule: Optional[str] = Field(None, min_length=3, max_length=200)
    capacity: Optional[int] = Field(None, ge=1, le=150)
    phone_number: Optional[PhoneNumber] = None


class RestaurantSummary(BaseModel):
    """Restaurant reference embedded in other responses"""
    id: UUID
    name: str
    average_rating: float
    num_reviews: int

    class Config:
        from_attributes = True


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    owner_id: UUID
    name: str
    description: str
    address: str
    categories: List[str]
    geo_location: List[str]
    schedule: str
    capacity: int
    email: str
    phone_number: str
    average_rating: float
    num_reviews: int
    images: List[RestaurantImageResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RestaurantListResponse(BaseModel):
    """Paginated restaurant list"""
    restaurants: List[RestaurantResponse]
    page: int
    total_pages: int
    total_count: int
    limit: int


class BusinessUserResponse(BaseModel):
    """Role assignment"""
    id: UUID
    user_id: UUID
    restaurant_id: UUID
    role: BusinessRole

    class Config:
        from_attributes = True


class RestaurantCreatedResponse(BaseModel):
    """Created restaurant together with the owner assignment"""
    restaurant: RestaurantResponse
    business_user: BusinessUserResponse


class ManagedRestaurantResponse(BaseModel):
    """Restaurant as seen by its staff"""
    role: BusinessRole
    restaurant: RestaurantResponse


class ImageCreate(BaseModel):
    """Add a gallery image by its uploaded URL"""
    image: str = Field(min_length=1, max_length=500)
    alt: Optional[str] = Field(None, max_length=200)
    is_header: bool = False
    replace_main_image: bool = False


class BannerUpdate(BaseModel):
    """Replace the banner image"""
    image: str = Field(min_length=1, max_length=500)
    alt: Optional[str] = Field(None, max_length=200)


class ImageUploadedResponse(BaseModel):
    message: str
    image: RestaurantImageResponse


class BannerUpdatedResponse(BaseModel):
    message: str
    banner_url: str
    restaurant: RestaurantResponse


class OperatorCreate(BaseModel):
    """Add an operator by email"""
    email: EmailStr


class OperatorResponse(BaseModel):
    """Operator of a restaurant"""
    id: UUID  # BusinessUser id
    user_id: UUID
    email: str
    name: str
    last_name: str
    username: str
