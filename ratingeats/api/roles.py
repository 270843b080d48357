"""Restaurant role authorization

Resolves the restaurant that owns a resource and checks the caller's
BusinessUser role over it.
"""

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.business_user import BusinessRole, BusinessUser, STAFF_ROLES
from ratingeats.models.post import Post
from ratingeats.models.reservation import Reservation
from ratingeats.models.restaurant import Restaurant
from ratingeats.models.user import User
from ratingeats.api.auth import get_current_active_user

logger = structlog.get_logger()


class ResourceKind(str, enum.Enum):
    """Kinds of resource a route can be authorized against"""
    RESTAURANT = "restaurant"
    POST = "post"
    RESERVATION = "reservation"


# Resource kind -> (model, attribute holding the restaurant id, not-found message)
_OWNING_RESTAURANT = {
    ResourceKind.POST: (Post, "author_restaurant_id", "Post not found."),
    ResourceKind.RESERVATION: (Reservation, "restaurant_id", "Reservation not found."),
}


@dataclass
class RoleContext:
    """What the gate resolved for the downstream handler"""
    user: User
    role: BusinessRole
    restaurant: Restaurant
    resource: Optional[Any] = None

    @property
    def restaurant_id(self) -> UUID:
        return self.restaurant.id


async def get_active_restaurant(db: AsyncSession, restaurant_id: UUID) -> Restaurant:
    """Load a non-deleted restaurant or fail with 404"""
    result = await db.execute(
        select(Restaurant).where(
            Restaurant.id == restaurant_id,
            Restaurant.is_deleted == False,
        )
    )
    restaurant = result.scalar_one_or_none()
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return restaurant


async def resolve_restaurant(
    db: AsyncSession,
    kind: ResourceKind,
    resource_id: UUID,
) -> Tuple[Restaurant, Optional[Any]]:
    """Resolve the restaurant owning a resource, returning it with the loaded resource"""
    if kind == ResourceKind.RESTAURANT:
        return await get_active_restaurant(db, resource_id), None

    model, attribute, missing = _OWNING_RESTAURANT[kind]
    resource = await db.get(model, resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail=missing)

    restaurant = await get_active_restaurant(db, getattr(resource, attribute))
    return restaurant, resource


async def get_restaurant_role(
    db: AsyncSession,
    user_id: UUID,
    restaurant_id: UUID,
) -> Optional[BusinessRole]:
    """Role of a user over a restaurant, or None"""
    result = await db.execute(
        select(BusinessUser.role).where(
            BusinessUser.user_id == user_id,
            BusinessUser.restaurant_id == restaurant_id,
        )
    )
    return result.scalar_one_or_none()


async def is_staff(db: AsyncSession, user_id: UUID, restaurant_id: UUID) -> bool:
    """Whether the user is owner or operator of the restaurant"""
    return await get_restaurant_role(db, user_id, restaurant_id) in STAFF_ROLES


def require_restaurant_role(
    roles: Iterable[BusinessRole] = STAFF_ROLES,
    kind: ResourceKind = ResourceKind.RESTAURANT,
    param: str = "restaurant_id",
):
    """Dependency factory gating a route on the caller's role over a restaurant"""
    allowed = tuple(roles)

    async def role_checker(
        request: Request,
        current_user: User = Depends(get_current_active_user),
        db: AsyncSession = Depends(get_db),
    ) -> RoleContext:
        raw_id = request.path_params.get(param)
        if raw_id is None:
            raise HTTPException(status_code=500, detail=f"Missing required ID parameter: {param}.")
        try:
            resource_id = UUID(str(raw_id))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid {kind.value} ID format")

        restaurant, resource = await resolve_restaurant(db, kind, resource_id)

        role = await get_restaurant_role(db, current_user.id, restaurant.id)
        if role is None:
            logger.info(
                "Restaurant access denied",
                user_id=str(current_user.id),
                restaurant_id=str(restaurant.id),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You have no permission to manage this restaurant",
            )
        if role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You have no permission to perform this action",
            )

        return RoleContext(user=current_user, role=role, restaurant=restaurant, resource=resource)

    return role_checker


require_staff = require_restaurant_role(STAFF_ROLES)
require_owner = require_restaurant_role((BusinessRole.OWNER,))
