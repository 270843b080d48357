"""Post API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.post import Post, PostState
from ratingeats.models.user import User
from ratingeats.schemas.post import PostCreate, PostResponse, PostMessageResponse
from ratingeats.services.notifications import notify_post
from ratingeats.api.auth import get_current_active_user
from ratingeats.api.roles import (
    ResourceKind,
    RoleContext,
    get_active_restaurant,
    is_staff,
    require_restaurant_role,
    require_staff,
)

router = APIRouter()
logger = structlog.get_logger()

require_post_staff = require_restaurant_role(kind=ResourceKind.POST, param="post_id")


def get_live_post(ctx: RoleContext) -> Post:
    post = ctx.resource
    if post.deleted:
        raise HTTPException(status_code=404, detail="Post was deleted before.")
    return post


@router.post("/restaurant/{restaurant_id}", response_model=PostMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    restaurant_id: UUID,
    post_data: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a post, published right away when made by the restaurant's staff"""
    if not post_data.image:
        raise HTTPException(status_code=400, detail="Image URL is required")

    restaurant = await get_active_restaurant(db, restaurant_id)
    staff = await is_staff(db, current_user.id, restaurant.id)

    post = Post(
        author=current_user,
        restaurant=restaurant,
        image_url=post_data.image,
        image_alt=post_data.content[:200] if post_data.content else "Post image",
        content=post_data.content or "",
        state=PostState.ACCEPTED if staff else PostState.PENDING,
    )
    db.add(post)
    await db.commit()

    logger.info(
        "Post created",
        post_id=str(post.id),
        restaurant_id=str(restaurant.id),
        state=post.state.value,
    )

    if staff:
        message = "Post created and uploaded successfully"
    else:
        message = "The post was sent and is pending acceptance."
    return PostMessageResponse(message=message, post=PostResponse.model_validate(post))


@router.get("/restaurant/{restaurant_id}", response_model=List[PostResponse])
async def list_restaurant_posts(
    restaurant_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Public, accepted posts of a restaurant"""
    restaurant = await get_active_restaurant(db, restaurant_id)

    result = await db.execute(
        select(Post)
        .where(
            Post.author_restaurant_id == restaurant.id,
            Post.state == PostState.ACCEPTED,
            Post.deleted == False,
        )
        .order_by(Post.created_at.desc())
    )
    return result.scalars().all()


@router.get("/restaurant/{restaurant_id}/pending", response_model=List[PostResponse])
async def list_pending_posts(
    restaurant_id: UUID,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Posts waiting for moderation (staff only)"""
    result = await db.execute(
        select(Post)
        .where(
            Post.author_restaurant_id == ctx.restaurant_id,
            Post.state == PostState.PENDING,
            Post.deleted == False,
        )
        .order_by(Post.created_at)
    )
    return result.scalars().all()


@router.patch("/{post_id}/accept", response_model=PostMessageResponse)
async def accept_post(
    post_id: UUID,
    ctx: RoleContext = Depends(require_post_staff),
    db: AsyncSession = Depends(get_db),
):
    """Accept a pending post"""
    post = get_live_post(ctx)

    if post.state == PostState.ACCEPTED:
        return PostMessageResponse(message="Post is already accepted.")
    if post.state == PostState.REJECTED:
        raise HTTPException(status_code=409, detail="Cannot accept a rejected post.")

    post.state = PostState.ACCEPTED
    await db.commit()

    logger.info("Post accepted", post_id=str(post.id), restaurant_id=str(ctx.restaurant_id))

    response = PostMessageResponse(
        message="Post accepted and visible to the public.",
        post=PostResponse.model_validate(post),
    )
    await notify_post(db, post, ctx.restaurant.name)
    return response


@router.patch("/{post_id}/reject", response_model=PostMessageResponse)
async def reject_post(
    post_id: UUID,
    ctx: RoleContext = Depends(require_post_staff),
    db: AsyncSession = Depends(get_db),
):
    """Reject a pending post"""
    post = get_live_post(ctx)

    if post.state == PostState.REJECTED:
        return PostMessageResponse(message="Post is already rejected.")
    if post.state == PostState.ACCEPTED:
        raise HTTPException(status_code=409, detail="Cannot reject an accepted post.")

    post.state = PostState.REJECTED
    await db.commit()

    logger.info("Post rejected", post_id=str(post.id), restaurant_id=str(ctx.restaurant_id))

    response = PostMessageResponse(
        message="Post has been rejected successfully",
        post=PostResponse.model_validate(post),
    )
    await notify_post(db, post, ctx.restaurant.name)
    return response


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Soft delete a post: staff always, the author only while it is pending"""
    post = await db.get(Post, post_id)

    if not post or post.deleted:
        raise HTTPException(status_code=404, detail="Post not found")

    if not await is_staff(db, current_user.id, post.author_restaurant_id):
        if post.author_user_id != current_user.id or post.state != PostState.PENDING:
            raise HTTPException(
                status_code=403,
                detail="User not authorized: Post is no longer pending or you are not the author.",
            )

    post.deleted = True
    await db.commit()

    logger.info("Post deleted", post_id=str(post_id), user_id=str(current_user.id))
