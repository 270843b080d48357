"""Restaurant rating aggregate"""

import math
from typing import Iterable
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.models.restaurant import Restaurant
from ratingeats.models.review import Review

logger = structlog.get_logger()


def average_rating(ratings: Iterable[int]) -> float:
    """Mean rating rounded half-up to one decimal, 0 when there are no ratings"""
    values = list(ratings)
    if not values:
        return 0
    mean = sum(values) / len(values)
    return math.floor(mean * 10 + 0.5) / 10


async def update_rating(db: AsyncSession, restaurant_id: UUID) -> None:
    """
    Recompute average_rating/num_reviews from all non-deleted reviews.

    Runs as its own commit after the review write. A failure here leaves the
    restaurant aggregate stale until the next review is created or deleted.
    """
    result = await db.execute(
        select(Review.rating).where(
            Review.restaurant_id == restaurant_id,
            Review.deleted == False,
        )
    )
    ratings = result.scalars().all()

    await db.execute(
        update(Restaurant)
        .where(Restaurant.id == restaurant_id)
        .values(average_rating=average_rating(ratings), num_reviews=len(ratings))
    )
    await db.commit()

    logger.info(
        "Restaurant rating updated",
        restaurant_id=str(restaurant_id),
        num_reviews=len(ratings),
    )
