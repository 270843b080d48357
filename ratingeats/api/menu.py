"""Menu image management API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.menu import MenuImage
from ratingeats.schemas.menu import (
    MenuImageCreate,
    MenuImageUpdate,
    MenuImageResponse,
    MenuImagesCreatedResponse,
    MenuImageUpdatedResponse,
)
from ratingeats.api.roles import RoleContext, require_staff

router = APIRouter()
logger = structlog.get_logger()


async def get_menu_image(db: AsyncSession, restaurant_id: UUID, image_id: UUID) -> MenuImage:
    result = await db.execute(
        select(MenuImage).where(
            MenuImage.id == image_id,
            MenuImage.restaurant_id == restaurant_id,
        )
    )
    image = result.scalar_one_or_none()
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


@router.get("/{restaurant_id}/menu/images", response_model=List[MenuImageResponse])
async def list_menu_images(
    restaurant_id: UUID,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """List menu pages in upload order"""
    result = await db.execute(
        select(MenuImage)
        .where(MenuImage.restaurant_id == ctx.restaurant_id)
        .order_by(MenuImage.uploaded_at)
    )
    return result.scalars().all()


@router.post("/{restaurant_id}/menu/images", response_model=MenuImagesCreatedResponse, status_code=201)
async def upload_menu_images(
    restaurant_id: UUID,
    menu_data: MenuImageCreate,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Append uploaded menu pages"""
    images = [MenuImage(restaurant_id=ctx.restaurant_id, url=url) for url in menu_data.images]
    db.add_all(images)
    await db.commit()

    logger.info("Menu images added", restaurant_id=str(ctx.restaurant_id), count=len(images))

    return MenuImagesCreatedResponse(
        message="Menu images uploaded successfully",
        images=images,
    )


@router.patch("/{restaurant_id}/menu/images/{image_id}", response_model=MenuImageUpdatedResponse)
async def replace_menu_image(
    restaurant_id: UUID,
    image_id: UUID,
    image_data: MenuImageUpdate,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Swap one menu page for a new upload"""
    image = await get_menu_image(db, ctx.restaurant_id, image_id)

    image.url = image_data.url
    if image_data.alt is not None:
        image.alt = image_data.alt
    await db.commit()
    await db.refresh(image)

    return MenuImageUpdatedResponse(message="Menu image replaced successfully", image=image)


@router.delete("/{restaurant_id}/menu/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_image(
    restaurant_id: UUID,
    image_id: UUID,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Remove a menu page"""
    image = await get_menu_image(db, ctx.restaurant_id, image_id)

    await db.delete(image)
    await db.commit()

    logger.info("Menu image deleted", restaurant_id=str(ctx.restaurant_id), image_id=str(image_id))
