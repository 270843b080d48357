"""Profile API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.business_user import BusinessUser
from ratingeats.models.review import Review
from ratingeats.models.user import User
from ratingeats.schemas.profile import ProfileUpdate, ProfileResponse, MyRestaurant
from ratingeats.schemas.restaurant import RestaurantResponse
from ratingeats.schemas.review import ReviewResponse
from ratingeats.api.auth import get_current_active_user
from ratingeats.api.roles import get_active_restaurant

router = APIRouter()
logger = structlog.get_logger()


def to_profile(user: User) -> ProfileResponse:
    return ProfileResponse(
        id=user.id,
        name=user.name,
        last_name=user.last_name,
        email=user.email,
        username=user.username,
        biography=user.biography,
        favorite_restaurant_ids=[r.id for r in user.favorites],
    )


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_current_active_user),
):
    """Get own profile"""
    return to_profile(current_user)


@router.patch("", response_model=ProfileResponse)
async def edit_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Update own profile, only fields that actually change are written"""
    updates = {
        field: value
        for field, value in profile_data.model_dump(exclude_unset=True).items()
        if value is not None and value != getattr(current_user, field)
    }
    if not updates:
        raise HTTPException(status_code=400, detail="No changes detected to update.")

    if "username" in updates:
        result = await db.execute(select(User.id).where(User.username == updates["username"]))
        if result.first():
            raise HTTPException(status_code=400, detail="Username already in use")

    for field, value in updates.items():
        setattr(current_user, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Username already in use")

    logger.info("Profile updated", user_id=str(current_user.id), fields=sorted(updates))
    return to_profile(current_user)


@router.get("/favorites", response_model=List[RestaurantResponse])
async def get_favorite_restaurants(
    current_user: User = Depends(get_current_active_user),
):
    """Restaurants the user follows"""
    return [r for r in current_user.favorites if not r.is_deleted]


@router.post("/favorites/{restaurant_id}")
async def add_favorite_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Follow a restaurant"""
    restaurant = await get_active_restaurant(db, restaurant_id)

    if any(r.id == restaurant.id for r in current_user.favorites):
        raise HTTPException(status_code=400, detail="Restaurant already in favorites.")

    current_user.favorites.append(restaurant)
    await db.commit()

    return {"message": "Restaurant added to favorites."}


@router.delete("/favorites/{restaurant_id}")
async def remove_favorite_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Unfollow a restaurant"""
    favorite = next((r for r in current_user.favorites if r.id == restaurant_id), None)
    if favorite is None:
        raise HTTPException(status_code=400, detail="Restaurant not found in favorites.")

    current_user.favorites.remove(favorite)
    await db.commit()

    return {"message": "Restaurant removed from favorites."}


@router.get("/reviews", response_model=List[ReviewResponse])
async def get_my_reviews(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Active reviews written by the user"""
    result = await db.execute(
        select(Review)
        .where(Review.user_id == current_user.id, Review.deleted == False)
        .order_by(Review.created_at.desc())
    )
    return result.scalars().all()


@router.get("/restaurants", response_model=List[MyRestaurant])
async def get_my_restaurants(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Restaurants the user owns or operates"""
    result = await db.execute(
        select(BusinessUser).where(BusinessUser.user_id == current_user.id)
    )
    return [
        MyRestaurant(business_user_id=bu.id, role=bu.role, restaurant=bu.restaurant)
        for bu in result.scalars().all()
        if not bu.restaurant.is_deleted
    ]
