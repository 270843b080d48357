"""Tests for reviews and the restaurant rating aggregate"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ratingeats.main import app
from ratingeats.models.restaurant import Restaurant
from ratingeats.models.review import Review
from ratingeats.services.ratings import average_rating


async def restaurant_rating(test_db, restaurant_id):
    result = await test_db.execute(
        select(Restaurant.average_rating, Restaurant.num_reviews).where(Restaurant.id == restaurant_id)
    )
    return tuple(result.one())


def test_average_rating_rounds_half_up():
    assert average_rating([5, 5, 4]) == 4.7
    assert average_rating([4, 5]) == 4.5
    assert average_rating([1, 2, 2, 2]) == 1.8
    assert average_rating([3]) == 3.0


def test_average_rating_empty():
    assert average_rating([]) == 0


@pytest.mark.asyncio
async def test_create_review_updates_rating(client: AsyncClient, test_db, restaurant, customer, auth_headers):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/reviews",
        json={"rating": 4, "comment": "Great cachapas"},
        headers=auth_headers(customer),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["review"]["rating"] == 4
    assert data["review"]["author"]["username"] == customer.username
    assert await restaurant_rating(test_db, restaurant.id) == (4.0, 1)


@pytest.mark.asyncio
async def test_rating_is_mean_of_active_reviews(
    client: AsyncClient, test_db, restaurant, owner, customer, outsider, auth_headers
):
    for user, rating in ((owner, 5), (customer, 5), (outsider, 4)):
        response = await client.post(
            f"/api/restaurants/{restaurant.id}/reviews",
            json={"rating": rating},
            headers=auth_headers(user),
        )
        assert response.status_code == 201

    assert await restaurant_rating(test_db, restaurant.id) == (4.7, 3)

    response = await client.get(f"/api/restaurants/{restaurant.id}")
    assert response.json()["average_rating"] == 4.7
    assert response.json()["num_reviews"] == 3


@pytest.mark.asyncio
async def test_second_active_review_conflicts(client: AsyncClient, restaurant, customer, auth_headers):
    url = f"/api/restaurants/{restaurant.id}/reviews"
    first = await client.post(url, json={"rating": 5}, headers=auth_headers(customer))
    assert first.status_code == 201

    second = await client.post(url, json={"rating": 3}, headers=auth_headers(customer))

    assert second.status_code == 409
    assert second.json()["message"] == "You have already submitted a review for this restaurant"


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6])
async def test_rating_out_of_range(client: AsyncClient, restaurant, customer, auth_headers, rating):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/reviews",
        json={"rating": rating},
        headers=auth_headers(customer),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Rating must be between 1 and 5"


@pytest.mark.asyncio
async def test_deleting_only_review_resets_rating(
    client: AsyncClient, test_db, restaurant, customer, auth_headers
):
    created = await client.post(
        f"/api/restaurants/{restaurant.id}/reviews",
        json={"rating": 2},
        headers=auth_headers(customer),
    )
    review_id = created.json()["review"]["id"]

    response = await client.delete(f"/api/restaurants/reviews/{review_id}", headers=auth_headers(customer))

    assert response.status_code == 204
    assert await restaurant_rating(test_db, restaurant.id) == (0, 0)


@pytest.mark.asyncio
async def test_review_again_after_delete(client: AsyncClient, test_db, restaurant, customer, auth_headers):
    url = f"/api/restaurants/{restaurant.id}/reviews"
    created = await client.post(url, json={"rating": 1}, headers=auth_headers(customer))
    await client.delete(f"/api/restaurants/reviews/{created.json()['review']['id']}", headers=auth_headers(customer))

    response = await client.post(url, json={"rating": 5}, headers=auth_headers(customer))

    assert response.status_code == 201
    assert await restaurant_rating(test_db, restaurant.id) == (5.0, 1)

    listed = await client.get(url)
    assert [r["rating"] for r in listed.json()] == [5]


@pytest.mark.asyncio
async def test_only_author_deletes_review(client: AsyncClient, restaurant, customer, owner, auth_headers):
    created = await client.post(
        f"/api/restaurants/{restaurant.id}/reviews",
        json={"rating": 3},
        headers=auth_headers(customer),
    )

    response = await client.delete(
        f"/api/restaurants/reviews/{created.json()['review']['id']}",
        headers=auth_headers(owner),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_active_review_unique_in_store(test_db, restaurant, customer):
    test_db.add(Review(restaurant_id=restaurant.id, user_id=customer.id, rating=5))
    await test_db.commit()

    test_db.add(Review(restaurant_id=restaurant.id, user_id=customer.id, rating=4, deleted=True))
    await test_db.commit()

    test_db.add(Review(restaurant_id=restaurant.id, user_id=customer.id, rating=3))
    with pytest.raises(IntegrityError):
        await test_db.commit()
    await test_db.rollback()


@pytest.mark.asyncio
async def test_failed_recompute_leaves_aggregate_stale(
    client: AsyncClient, test_db, restaurant, customer, auth_headers, monkeypatch
):
    async def broken_update_rating(db, restaurant_id):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr("ratingeats.api.reviews.update_rating", broken_update_rating)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as failing_client:
        response = await failing_client.post(
            f"/api/restaurants/{restaurant.id}/reviews",
            json={"rating": 5},
            headers=auth_headers(customer),
        )

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}

    result = await test_db.execute(select(Review).where(Review.restaurant_id == restaurant.id))
    assert len(result.scalars().all()) == 1
    assert await restaurant_rating(test_db, restaurant.id) == (0, 0)
