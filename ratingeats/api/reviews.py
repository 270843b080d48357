"""Review API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.review import Review
from ratingeats.models.user import User
from ratingeats.schemas.review import ReviewCreate, ReviewResponse, ReviewCreatedResponse
from ratingeats.services.ratings import update_rating
from ratingeats.api.auth import get_current_active_user
from ratingeats.api.roles import get_active_restaurant

router = APIRouter()
logger = structlog.get_logger()

DUPLICATE_REVIEW = "You have already submitted a review for this restaurant"


@router.post("/{restaurant_id}/reviews", response_model=ReviewCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    restaurant_id: UUID,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a review and recompute the restaurant rating"""
    restaurant = await get_active_restaurant(db, restaurant_id)

    if review_data.rating < 1 or review_data.rating > 5:
        raise HTTPException(status_code=400, detail="Rating must be between 1 and 5")

    result = await db.execute(
        select(Review.id).where(
            Review.restaurant_id == restaurant.id,
            Review.user_id == current_user.id,
            Review.deleted == False,
        )
    )
    if result.first():
        raise HTTPException(status_code=409, detail=DUPLICATE_REVIEW)

    review = Review(
        restaurant_id=restaurant.id,
        user_id=current_user.id,
        rating=review_data.rating,
        comment=review_data.comment,
        author=current_user,
        restaurant=restaurant,
    )
    db.add(review)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_REVIEW)

    response = ReviewCreatedResponse(
        message="Review created and rating updated.",
        review=ReviewResponse.model_validate(review),
    )

    await update_rating(db, restaurant.id)

    logger.info("Review created", review_id=str(review.id), restaurant_id=str(restaurant.id))
    return response


@router.get("/{restaurant_id}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    restaurant_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """List active reviews of a restaurant"""
    result = await db.execute(
        select(Review)
        .where(
            Review.restaurant_id == restaurant_id,
            Review.deleted == False,
        )
        .order_by(Review.created_at.desc())
    )
    return result.scalars().all()


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Soft delete own review and recompute the restaurant rating"""
    review = await db.get(Review, review_id)

    if not review or review.deleted:
        raise HTTPException(status_code=404, detail="Review not found")

    if review.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not authorized to delete this review")

    review.deleted = True
    await db.commit()

    await update_rating(db, review.restaurant_id)

    logger.info("Review deleted", review_id=str(review_id), restaurant_id=str(review.restaurant_id))
