"""Tests for restaurant management"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ratingeats.models.business_user import BusinessUser, BusinessRole
from ratingeats.models.restaurant import Restaurant


RESTAURANT_PAYLOAD = {
    "name": "Pizzeria Roma",
    "description": "Wood fired pizza and fresh pasta",
    "address": "Calle 5, Maracaibo",
    "categories": ["italian", "pizza"],
    "geo_location": ["10.6427,-71.6125"],
    "schedule": "Mon-Sat 12:00-23:00",
    "capacity": 40,
    "email": "ciao@pizzeriaroma.com",
    "phone_number": "04161234567",
}


@pytest.mark.asyncio
async def test_create_restaurant_makes_creator_owner(client: AsyncClient, test_db, customer, auth_headers):
    response = await client.post("/api/restaurants", json=RESTAURANT_PAYLOAD, headers=auth_headers(customer))

    assert response.status_code == 201
    data = response.json()
    assert data["restaurant"]["owner_id"] == str(customer.id)
    assert data["restaurant"]["average_rating"] == 0
    assert data["business_user"]["role"] == "owner"

    result = await test_db.execute(select(BusinessUser).where(BusinessUser.user_id == customer.id))
    assert result.scalar_one().role == BusinessRole.OWNER


@pytest.mark.asyncio
async def test_create_restaurant_duplicate_email(client: AsyncClient, restaurant, customer, auth_headers):
    payload = {**RESTAURANT_PAYLOAD, "email": restaurant.email}

    response = await client.post("/api/restaurants", json=payload, headers=auth_headers(customer))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_restaurant_invalid_geo_location(client: AsyncClient, customer, auth_headers):
    payload = {**RESTAURANT_PAYLOAD, "geo_location": ["somewhere"]}

    response = await client.post("/api/restaurants", json=payload, headers=auth_headers(customer))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "geo_location"


@pytest.mark.asyncio
async def test_list_restaurants_paginates(client: AsyncClient, restaurant, other_restaurant):
    response = await client.get("/api/restaurants", params={"page": 1, "limit": 1})

    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 2
    assert data["total_pages"] == 2
    assert len(data["restaurants"]) == 1


@pytest.mark.asyncio
async def test_filter_by_category(client: AsyncClient, restaurant, other_restaurant):
    response = await client.get("/api/restaurants/filter", params={"categories": "Sushi,thai"})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Sushi Bar"]


@pytest.mark.asyncio
async def test_search(client: AsyncClient, restaurant, other_restaurant):
    response = await client.get("/api/restaurants/search", params={"q": "arepa"})
    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["La Arepera"]

    response = await client.get("/api/restaurants/search", params={"q": "tacos"})
    assert response.status_code == 404

    response = await client.get("/api/restaurants/search", params={"q": "  "})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_restaurant_by_operator(client: AsyncClient, restaurant, operator, auth_headers):
    response = await client.patch(
        f"/api/restaurants/{restaurant.id}",
        json={"capacity": 80},
        headers=auth_headers(operator),
    )

    assert response.status_code == 200
    assert response.json()["capacity"] == 80


@pytest.mark.asyncio
async def test_update_without_changes(client: AsyncClient, restaurant, owner, auth_headers):
    response = await client.patch(
        f"/api/restaurants/{restaurant.id}",
        json={"capacity": restaurant.capacity},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "No changes detected to update."


@pytest.mark.asyncio
async def test_delete_restaurant_is_soft(client: AsyncClient, test_db, restaurant, owner, operator, auth_headers):
    response = await client.delete(f"/api/restaurants/{restaurant.id}", headers=auth_headers(operator))
    assert response.status_code == 403

    response = await client.delete(f"/api/restaurants/{restaurant.id}", headers=auth_headers(owner))
    assert response.status_code == 204

    result = await test_db.execute(select(Restaurant.is_deleted).where(Restaurant.id == restaurant.id))
    assert result.scalar_one() is True

    response = await client.get(f"/api/restaurants/{restaurant.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upload_image_and_banner(client: AsyncClient, restaurant, owner, auth_headers):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/images",
        json={"image": "uploads/laarepera/1.jpg"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 200
    assert response.json()["image"]["alt"] == "La Arepera image"

    response = await client.patch(
        f"/api/restaurants/{restaurant.id}/images/banner",
        json={"image": "uploads/laarepera/banner.jpg"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["banner_url"] == "uploads/laarepera/banner.jpg"
    assert sorted(img["is_header"] for img in data["restaurant"]["images"]) == [False, True]


@pytest.mark.asyncio
async def test_operator_management(client: AsyncClient, restaurant, owner, customer, auth_headers):
    response = await client.post(
        f"/api/restaurants/{restaurant.id}/operators",
        json={"email": customer.email},
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    business_user_id = response.json()["id"]

    response = await client.post(
        f"/api/restaurants/{restaurant.id}/operators",
        json={"email": customer.email},
        headers=auth_headers(owner),
    )
    assert response.status_code == 400

    response = await client.get(f"/api/restaurants/{restaurant.id}/operators", headers=auth_headers(owner))
    assert [op["username"] for op in response.json()] == [customer.username]

    response = await client.delete(
        f"/api/restaurants/{restaurant.id}/operators/{business_user_id}",
        headers=auth_headers(owner),
    )
    assert response.status_code == 204

    response = await client.get(f"/api/restaurants/{restaurant.id}/manage", headers=auth_headers(customer))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_owner_cannot_be_removed(client: AsyncClient, test_db, restaurant, owner, auth_headers):
    result = await test_db.execute(
        select(BusinessUser.id).where(
            BusinessUser.restaurant_id == restaurant.id,
            BusinessUser.role == BusinessRole.OWNER,
        )
    )
    owner_record_id = result.scalar_one()

    response = await client.delete(
        f"/api/restaurants/{restaurant.id}/operators/{owner_record_id}",
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot remove owner from the restaurant"
