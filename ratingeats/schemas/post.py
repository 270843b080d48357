"""Post schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from ratingeats.models.post import PostState


class PostCreate(BaseModel):
    """Create post request, the image is an already uploaded URL"""
    image: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = Field(None, max_length=500)


class PostAuthor(BaseModel):
    id: UUID
    username: str

    class Config:
        from_attributes = True


class PostResponse(BaseModel):
    """Post response"""
    id: UUID
    author_user_id: UUID
    author_restaurant_id: UUID
    author: Optional[PostAuthor] = None
    image_url: str
    image_alt: Optional[str]
    content: Optional[str]
    state: PostState
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostMessageResponse(BaseModel):
    """Message plus the affected post, when there is one"""
    message: str
    post: Optional[PostResponse] = None
