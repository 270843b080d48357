"""Post model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from ratingeats.database import Base


class PostState(str, enum.Enum):
    """Moderation states of a post"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Post(Base):
    """Photo posts shown on a restaurant page once accepted"""
    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    author_user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    author_restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)

    image_url = Column(String(500), nullable=False)
    image_alt = Column(String(200))
    content = Column(String(500), default="")

    state = Column(Enum(PostState), nullable=False, default=PostState.PENDING)
    deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", lazy="joined")
    restaurant = relationship("Restaurant", lazy="joined")
