"""Review schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Create review request"""
    rating: int
    comment: Optional[str] = Field(None, max_length=500)


class ReviewAuthor(BaseModel):
    id: UUID
    username: str

    class Config:
        from_attributes = True


class ReviewRestaurant(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    """Review response"""
    id: UUID
    restaurant_id: UUID
    user_id: UUID
    rating: int
    comment: Optional[str]
    author: Optional[ReviewAuthor] = None
    restaurant: Optional[ReviewRestaurant] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewCreatedResponse(BaseModel):
    message: str
    review: ReviewResponse
