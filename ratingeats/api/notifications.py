"""Notification API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.notification import Notification
from ratingeats.models.user import User
from ratingeats.schemas.notification import NotificationResponse
from ratingeats.api.auth import get_current_active_user

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread: bool = False,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Notifications addressed to the current user, newest first"""
    query = select(Notification).where(Notification.user_id == current_user.id)
    if unread:
        query = query.where(Notification.read == False)

    result = await db.execute(query.order_by(Notification.date.desc()))
    return result.scalars().all()


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark one notification as read"""
    notification = await db.get(Notification, notification_id)

    if not notification or notification.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Notification not found")

    notification.read = True
    await db.commit()

    logger.info("Notification read", notification_id=str(notification.id), user_id=str(current_user.id))

    return notification
