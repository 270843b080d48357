"""Restaurant management API endpoints"""

import math
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.config import settings
from ratingeats.database import get_db
from ratingeats.models.business_user import BusinessRole, BusinessUser
from ratingeats.models.restaurant import Restaurant, RestaurantImage
from ratingeats.models.user import User
from ratingeats.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
    RestaurantListResponse,
    RestaurantCreatedResponse,
    ManagedRestaurantResponse,
    ImageCreate,
    ImageUploadedResponse,
    BannerUpdate,
    BannerUpdatedResponse,
    BusinessUserResponse,
    OperatorCreate,
    OperatorResponse,
)
from ratingeats.api.auth import get_current_active_user
from ratingeats.api.roles import RoleContext, get_active_restaurant, require_owner, require_staff

router = APIRouter()
logger = structlog.get_logger()


def matches_search(restaurant: Restaurant, term: str) -> bool:
    """Case-insensitive match on name, description or any category"""
    term = term.lower()
    return (
        term in restaurant.name.lower()
        or term in restaurant.description.lower()
        or any(term in category.lower() for category in restaurant.categories or [])
    )


@router.post("", response_model=RestaurantCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a restaurant, the creator becomes its owner"""
    restaurant = Restaurant(owner_id=current_user.id, images=[], **restaurant_data.model_dump())
    db.add(restaurant)
    try:
        await db.flush()

        business_user = BusinessUser(
            user_id=current_user.id,
            restaurant_id=restaurant.id,
            role=BusinessRole.OWNER,
        )
        db.add(business_user)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="The email or phone number is already in use.")

    logger.info("Restaurant created", restaurant_id=str(restaurant.id), owner_id=str(current_user.id))

    return RestaurantCreatedResponse(
        restaurant=RestaurantResponse.model_validate(restaurant),
        business_user=BusinessUserResponse.model_validate(business_user),
    )


@router.get("", response_model=RestaurantListResponse)
async def list_restaurants(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: AsyncSession = Depends(get_db),
):
    """List restaurants with pagination"""
    base_filter = Restaurant.is_deleted == False

    total_result = await db.execute(select(func.count(Restaurant.id)).where(base_filter))
    total = total_result.scalar()

    offset = (page - 1) * limit
    result = await db.execute(
        select(Restaurant)
        .where(base_filter)
        .order_by(Restaurant.created_at)
        .offset(offset)
        .limit(limit)
    )

    return RestaurantListResponse(
        restaurants=result.scalars().all(),
        page=page,
        total_pages=math.ceil(total / limit),
        total_count=total,
        limit=limit,
    )


@router.get("/filter", response_model=List[RestaurantResponse])
async def filter_restaurants(
    categories: Optional[str] = None,
    rating: Optional[float] = Query(None, ge=0, le=5),
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Filter restaurants by categories (comma separated), minimum rating and text"""
    query = select(Restaurant).where(Restaurant.is_deleted == False)
    if rating is not None:
        query = query.where(Restaurant.average_rating >= rating)

    result = await db.execute(query.order_by(Restaurant.name))
    restaurants = result.scalars().all()

    if categories:
        wanted = {c.strip().lower() for c in categories.split(",") if c.strip()}
        restaurants = [
            r for r in restaurants
            if any(category.lower() in wanted for category in r.categories or [])
        ]

    if search:
        restaurants = [r for r in restaurants if matches_search(r, search)]

    return restaurants


@router.get("/search", response_model=List[RestaurantResponse])
async def search_restaurants(
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Free text search, best rated first"""
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search term is required")

    result = await db.execute(
        select(Restaurant)
        .where(Restaurant.is_deleted == False)
        .order_by(Restaurant.average_rating.desc(), Restaurant.name)
    )
    restaurants = [r for r in result.scalars().all() if matches_search(r, q.strip())]

    if not restaurants:
        raise HTTPException(status_code=404, detail="No matching restaurants found.")

    return restaurants


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant details"""
    return await get_active_restaurant(db, restaurant_id)


@router.patch("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: UUID,
    restaurant_data: RestaurantUpdate,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Update restaurant, only fields that actually change are written"""
    restaurant = ctx.restaurant

    updates = {
        field: value
        for field, value in restaurant_data.model_dump(exclude_unset=True).items()
        if value not in (None, "") and value != getattr(restaurant, field)
    }
    if not updates:
        raise HTTPException(status_code=400, detail="No changes detected to update.")

    for field, value in updates.items():
        setattr(restaurant, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="The phone number is already in use.")
    await db.refresh(restaurant)

    logger.info("Restaurant updated", restaurant_id=str(restaurant.id), fields=sorted(updates))
    return restaurant


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: UUID,
    ctx: RoleContext = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Delete restaurant (soft delete - owner only)"""
    restaurant = ctx.restaurant
    if restaurant.owner_id != ctx.user.id:
        raise HTTPException(status_code=403, detail="You have no permission to manage this restaurant")

    restaurant.is_deleted = True
    restaurant.deleted_at = datetime.utcnow()
    await db.commit()

    logger.info("Restaurant deleted", restaurant_id=str(restaurant.id))


@router.post("/{restaurant_id}/images", response_model=ImageUploadedResponse)
async def upload_image(
    restaurant_id: UUID,
    image_data: ImageCreate,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Attach an uploaded image to the restaurant gallery"""
    restaurant = ctx.restaurant

    image = RestaurantImage(
        url=image_data.image,
        alt=image_data.alt or f"{restaurant.name} image",
        is_header=image_data.is_header,
    )
    if image_data.replace_main_image:
        restaurant.images = [image]
    elif image_data.is_header:
        # at most one banner
        restaurant.images = [img for img in restaurant.images if not img.is_header] + [image]
    else:
        restaurant.images.append(image)
    await db.commit()

    message = "Main image replaced successfully" if image_data.replace_main_image else "Image uploaded successfully"
    return ImageUploadedResponse(message=message, image=image)


@router.patch("/{restaurant_id}/images/banner", response_model=BannerUpdatedResponse)
async def update_banner_image(
    restaurant_id: UUID,
    banner_data: BannerUpdate,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Replace the header image, keeping the rest of the gallery"""
    restaurant = ctx.restaurant

    banner = RestaurantImage(
        url=banner_data.image,
        alt=banner_data.alt or f"{restaurant.name} banner image",
        is_header=True,
    )
    restaurant.images = [img for img in restaurant.images if not img.is_header] + [banner]
    await db.commit()

    return BannerUpdatedResponse(
        message="Banner image updated successfully",
        banner_url=banner.url,
        restaurant=restaurant,
    )


@router.get("/{restaurant_id}/manage", response_model=ManagedRestaurantResponse)
async def get_restaurant_to_manage(
    restaurant_id: UUID,
    ctx: RoleContext = Depends(require_staff),
):
    """Restaurant as seen by its staff, with the caller's role"""
    return ManagedRestaurantResponse(role=ctx.role, restaurant=ctx.restaurant)


@router.get("/{restaurant_id}/operators", response_model=List[OperatorResponse])
async def list_operators(
    restaurant_id: UUID,
    ctx: RoleContext = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """List operators (owner only)"""
    result = await db.execute(
        select(BusinessUser).where(
            BusinessUser.restaurant_id == ctx.restaurant_id,
            BusinessUser.role == BusinessRole.OPERATOR,
        )
    )
    return [
        OperatorResponse(
            id=op.id,
            user_id=op.user_id,
            email=op.user.email,
            name=op.user.name,
            last_name=op.user.last_name,
            username=op.user.username,
        )
        for op in result.scalars().all()
    ]


@router.post("/{restaurant_id}/operators", response_model=BusinessUserResponse, status_code=status.HTTP_201_CREATED)
async def add_operator(
    restaurant_id: UUID,
    operator_data: OperatorCreate,
    ctx: RoleContext = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Grant the operator role to an existing user (owner only)"""
    result = await db.execute(select(User).where(User.email == operator_data.email.lower()))
    user_to_add = result.scalar_one_or_none()
    if not user_to_add:
        raise HTTPException(status_code=404, detail="User not found")

    result = await db.execute(
        select(BusinessUser).where(
            BusinessUser.restaurant_id == ctx.restaurant_id,
            BusinessUser.user_id == user_to_add.id,
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="This user is already associated with the restaurant")

    business_user = BusinessUser(
        user_id=user_to_add.id,
        restaurant_id=ctx.restaurant_id,
        role=BusinessRole.OPERATOR,
    )
    db.add(business_user)
    await db.commit()

    logger.info("Operator added", restaurant_id=str(ctx.restaurant_id), user_id=str(user_to_add.id))
    return business_user


@router.delete("/{restaurant_id}/operators/{business_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_operator(
    restaurant_id: UUID,
    business_user_id: UUID,
    ctx: RoleContext = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Revoke an operator role (owner only)"""
    result = await db.execute(
        select(BusinessUser).where(
            BusinessUser.id == business_user_id,
            BusinessUser.restaurant_id == ctx.restaurant_id,
        )
    )
    business_user = result.scalar_one_or_none()

    if not business_user:
        raise HTTPException(status_code=404, detail="Operator relationship not found")

    if business_user.role == BusinessRole.OWNER:
        raise HTTPException(status_code=400, detail="Cannot remove owner from the restaurant")

    await db.delete(business_user)
    await db.commit()

    logger.info("Operator removed", restaurant_id=str(ctx.restaurant_id), business_user_id=str(business_user_id))
