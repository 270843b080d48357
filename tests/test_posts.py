"""Tests for post creation and moderation"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ratingeats.models.notification import Notification, NotificationType
from ratingeats.models.post import Post, PostState


@pytest.fixture
def make_post(test_db, restaurant, customer):
    """Factory inserting a post by the customer"""
    async def _make(state: PostState = PostState.PENDING, deleted: bool = False) -> Post:
        post = Post(
            author_user_id=customer.id,
            author_restaurant_id=restaurant.id,
            image_url="uploads/posts/arepa.jpg",
            content="Best arepa ever",
            state=state,
            deleted=deleted,
        )
        test_db.add(post)
        await test_db.commit()
        return post

    return _make


@pytest.mark.asyncio
async def test_customer_post_is_pending(client: AsyncClient, restaurant, customer, auth_headers):
    response = await client.post(
        f"/api/posts/restaurant/{restaurant.id}",
        json={"image": "uploads/posts/1.jpg", "content": "Lovely dinner"},
        headers=auth_headers(customer),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "The post was sent and is pending acceptance."
    assert data["post"]["state"] == "pending"
    assert data["post"]["author"]["username"] == customer.username


@pytest.mark.asyncio
async def test_staff_post_is_accepted(client: AsyncClient, restaurant, owner, auth_headers):
    response = await client.post(
        f"/api/posts/restaurant/{restaurant.id}",
        json={"image": "uploads/posts/2.jpg"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    assert response.json()["post"]["state"] == "accepted"


@pytest.mark.asyncio
async def test_post_requires_image(client: AsyncClient, restaurant, customer, auth_headers):
    response = await client.post(
        f"/api/posts/restaurant/{restaurant.id}",
        json={"content": "No picture"},
        headers=auth_headers(customer),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Image URL is required"


@pytest.mark.asyncio
async def test_accept_pending_post_notifies_author(
    client: AsyncClient, test_db, operator, customer, make_post, auth_headers
):
    post = await make_post()

    response = await client.patch(f"/api/posts/{post.id}/accept", headers=auth_headers(operator))

    assert response.status_code == 200
    assert response.json()["post"]["state"] == "accepted"

    result = await test_db.execute(select(Notification).where(Notification.user_id == customer.id))
    notification = result.scalar_one()
    assert notification.type == NotificationType.POST
    assert notification.message == "Your post has been accepted at La Arepera."


@pytest.mark.asyncio
async def test_accept_is_idempotent(client: AsyncClient, test_db, owner, make_post, auth_headers):
    post = await make_post(PostState.ACCEPTED)

    response = await client.patch(f"/api/posts/{post.id}/accept", headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.json() == {"message": "Post is already accepted.", "post": None}

    result = await test_db.execute(select(Notification))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_reject_is_idempotent(client: AsyncClient, owner, make_post, auth_headers):
    post = await make_post(PostState.REJECTED)

    response = await client.patch(f"/api/posts/{post.id}/reject", headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.json()["message"] == "Post is already rejected."


@pytest.mark.asyncio
async def test_cross_transitions_conflict(client: AsyncClient, owner, make_post, auth_headers):
    accepted = await make_post(PostState.ACCEPTED)
    rejected = await make_post(PostState.REJECTED)

    response = await client.patch(f"/api/posts/{accepted.id}/reject", headers=auth_headers(owner))
    assert response.status_code == 409

    response = await client.patch(f"/api/posts/{rejected.id}/accept", headers=auth_headers(owner))
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_moderating_deleted_post(client: AsyncClient, owner, make_post, auth_headers):
    post = await make_post(deleted=True)

    response = await client.patch(f"/api/posts/{post.id}/accept", headers=auth_headers(owner))

    assert response.status_code == 404
    assert response.json()["message"] == "Post was deleted before."


@pytest.mark.asyncio
async def test_non_staff_cannot_moderate(client: AsyncClient, customer, make_post, auth_headers):
    post = await make_post()

    response = await client.patch(f"/api/posts/{post.id}/accept", headers=auth_headers(customer))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_public_listing_shows_only_accepted(client: AsyncClient, restaurant, make_post):
    await make_post(PostState.PENDING)
    accepted = await make_post(PostState.ACCEPTED)
    await make_post(PostState.ACCEPTED, deleted=True)

    response = await client.get(f"/api/posts/restaurant/{restaurant.id}")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [str(accepted.id)]


@pytest.mark.asyncio
async def test_pending_listing_is_staff_only(client: AsyncClient, restaurant, owner, customer, make_post, auth_headers):
    pending = await make_post()

    response = await client.get(f"/api/posts/restaurant/{restaurant.id}/pending", headers=auth_headers(owner))
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [str(pending.id)]

    response = await client.get(f"/api/posts/restaurant/{restaurant.id}/pending", headers=auth_headers(customer))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_author_deletes_pending_post(client: AsyncClient, test_db, customer, make_post, auth_headers):
    post = await make_post()

    response = await client.delete(f"/api/posts/{post.id}", headers=auth_headers(customer))

    assert response.status_code == 204
    result = await test_db.execute(select(Post.deleted).where(Post.id == post.id))
    assert result.scalar_one() is True


@pytest.mark.asyncio
async def test_author_cannot_delete_accepted_post(client: AsyncClient, customer, make_post, auth_headers):
    post = await make_post(PostState.ACCEPTED)

    response = await client.delete(f"/api/posts/{post.id}", headers=auth_headers(customer))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_staff_deletes_accepted_post(client: AsyncClient, operator, make_post, auth_headers):
    post = await make_post(PostState.ACCEPTED)

    response = await client.delete(f"/api/posts/{post.id}", headers=auth_headers(operator))

    assert response.status_code == 204
