"""Notification emitter for reservation and post transitions"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.models.notification import Notification, NotificationType
from ratingeats.models.post import Post, PostState
from ratingeats.models.reservation import Reservation, ReservationState

logger = structlog.get_logger()

RESERVATION_VERBS = {
    ReservationState.CONFIRMED: "accepted",
    ReservationState.REJECTED: "rejected",
    ReservationState.COMPLETED: "completed",
    ReservationState.CANCELLED: "canceled",
}

POST_VERBS = {
    PostState.ACCEPTED: "accepted",
    PostState.REJECTED: "rejected",
}


def reservation_message(reservation: Reservation, restaurant_name: str) -> str:
    verb = RESERVATION_VERBS[reservation.state]
    day = reservation.date_reservation.isoformat() if reservation.date_reservation else ""
    return (
        f"Your reservation has been {verb} at {restaurant_name} on {day} "
        f"at {reservation.time or ''} for {reservation.number_of_guests or ''} people "
        f"for {reservation.customer_name or ''}."
    )


def post_message(post: Post, restaurant_name: str) -> str:
    return f"Your post has been {POST_VERBS[post.state]} at {restaurant_name}."


async def emit(
    db: AsyncSession,
    user_id: UUID,
    notification_type: NotificationType,
    message: str,
    restaurant_id: Optional[UUID] = None,
) -> Optional[Notification]:
    """
    Store a notification. Fire-and-forget: the caller's transition is already
    committed, so a store error is logged and swallowed.
    """
    notification = Notification(
        user_id=user_id,
        restaurant_id=restaurant_id,
        type=notification_type,
        message=message[:500],
    )
    try:
        db.add(notification)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Failed to store notification",
            user_id=str(user_id),
            type=notification_type.value,
        )
        return None

    logger.info("Notification emitted", user_id=str(user_id), type=notification_type.value)
    return notification


async def notify_reservation(db: AsyncSession, reservation: Reservation, restaurant_name: str):
    """Tell the customer about a reservation transition"""
    return await emit(
        db,
        user_id=reservation.user_id,
        restaurant_id=reservation.restaurant_id,
        notification_type=NotificationType.RESERVATION,
        message=reservation_message(reservation, restaurant_name),
    )


async def notify_post(db: AsyncSession, post: Post, restaurant_name: str):
    """Tell the author about a moderation decision"""
    return await emit(
        db,
        user_id=post.author_user_id,
        restaurant_id=post.author_restaurant_id,
        notification_type=NotificationType.POST,
        message=post_message(post, restaurant_name),
    )
