"""Notification schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from ratingeats.models.notification import NotificationType


class NotificationResponse(BaseModel):
    """Notification response"""
    id: UUID
    user_id: UUID
    restaurant_id: Optional[UUID]
    type: NotificationType
    message: str
    read: bool
    date: datetime

    class Config:
        from_attributes = True
