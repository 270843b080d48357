"""Test configuration and fixtures"""

from datetime import date, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from ratingeats.main import app
from ratingeats.database import Base, get_db
from ratingeats.models.business_user import BusinessUser, BusinessRole
from ratingeats.models.restaurant import Restaurant
from ratingeats.models.reservation import Reservation, ReservationState
from ratingeats.models.user import User
from ratingeats.api.auth import create_access_token, get_password_hash


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "Secret123!"


@pytest.fixture
async def session_factory():
    """Create test database and a session factory bound to it"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(session_factory):
    """Session used by fixtures and direct assertions"""
    async with session_factory() as session:
        yield session


def make_user(name: str, username: str) -> User:
    return User(
        name=name,
        last_name="Tester",
        email=f"{username}@example.com",
        username=username,
        hashed_password=get_password_hash(TEST_PASSWORD),
        is_active=True,
        favorites=[],
    )


@pytest.fixture
async def owner(test_db):
    """Owner of the test restaurant"""
    user = make_user("Olivia", "owner01")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def customer(test_db):
    """User with no role on any restaurant"""
    user = make_user("Carlos", "customer01")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def outsider(test_db):
    """Second user with no role on any restaurant"""
    user = make_user("Oscar", "outsider01")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def restaurant(test_db, owner):
    """Restaurant with its owner BusinessUser record"""
    restaurant = Restaurant(
        owner_id=owner.id,
        name="La Arepera",
        description="Arepas and cachapas all day long",
        address="Av. Principal, Caracas",
        categories=["venezuelan", "breakfast"],
        geo_location=["10.4961,-66.8528"],
        schedule="Mon-Sun 07:00-22:00",
        capacity=60,
        email="contacto@laarepera.com",
        phone_number="04121234567",
        images=[],
    )
    test_db.add(restaurant)
    await test_db.flush()

    test_db.add(BusinessUser(user_id=owner.id, restaurant_id=restaurant.id, role=BusinessRole.OWNER))
    await test_db.commit()

    return restaurant


@pytest.fixture
async def operator(test_db, restaurant):
    """User holding the operator role on the test restaurant"""
    user = make_user("Pedro", "operator01")
    test_db.add(user)
    await test_db.flush()

    test_db.add(BusinessUser(user_id=user.id, restaurant_id=restaurant.id, role=BusinessRole.OPERATOR))
    await test_db.commit()

    return user


@pytest.fixture
async def other_restaurant(test_db, outsider):
    """Restaurant owned by the outsider"""
    restaurant = Restaurant(
        owner_id=outsider.id,
        name="Sushi Bar",
        description="Fresh rolls and nigiri every evening",
        address="Calle Sur, Valencia",
        categories=["japanese", "sushi"],
        geo_location=["10.1620,-68.0077"],
        schedule="Tue-Sun 18:00-23:00",
        capacity=30,
        email="hola@sushibar.com",
        phone_number="04241234567",
        images=[],
    )
    test_db.add(restaurant)
    await test_db.flush()

    test_db.add(BusinessUser(user_id=outsider.id, restaurant_id=restaurant.id, role=BusinessRole.OWNER))
    await test_db.commit()

    return restaurant


@pytest.fixture
def make_reservation(test_db, restaurant, customer):
    """Factory inserting a reservation of the customer in a given state"""
    async def _make(state: ReservationState = ReservationState.PENDING) -> Reservation:
        reservation = Reservation(
            restaurant_id=restaurant.id,
            user_id=customer.id,
            customer_name="Carlos Tester",
            phone_number="04149876543",
            date_reservation=date.today() + timedelta(days=2),
            time="20:30",
            number_of_guests=4,
            state=state,
        )
        test_db.add(reservation)
        await test_db.commit()
        return reservation

    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for a user"""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
async def client(session_factory):
    """Create test client with overridden database"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
