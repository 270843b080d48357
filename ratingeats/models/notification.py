"""Notification model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum, ForeignKey, Uuid

from ratingeats.database import Base


class NotificationType(str, enum.Enum):
    """What a notification is about"""
    RESERVATION = "reservation"
    REVIEW = "review"
    POST = "post"
    OTHER = "other"


class Notification(Base):
    """Append-only messages addressed to a user"""
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"))
    type = Column(Enum(NotificationType), nullable=False, default=NotificationType.OTHER)
    message = Column(String(500), nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    date = Column(DateTime, default=datetime.utcnow)
