#!/usr/bin/env python3
"""
Seed script to create demo users, a restaurant and its staff
"""

import asyncio
from datetime import date, timedelta


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from ratingeats.database import SessionLocal, engine, Base
    from ratingeats.models.user import User
    from ratingeats.models.business_user import BusinessUser, BusinessRole
    from ratingeats.models.restaurant import Restaurant, RestaurantImage
    from ratingeats.models.reservation import Reservation, ReservationState
    from ratingeats.models.review import Review
    from ratingeats.api.auth import get_password_hash
    from ratingeats.services.ratings import update_rating

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        result = await db.execute(
            select(Restaurant).where(Restaurant.email == "contacto@laarepera.com")
        )
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo users...")

        owner = User(
            name="Maria",
            last_name="Gonzalez",
            email="maria@ratingeats.com",
            username="mariag",
            hashed_password=get_password_hash("Owner123!"),
        )
        operator = User(
            name="Pedro",
            last_name="Perez",
            email="pedro@ratingeats.com",
            username="pedrop",
            hashed_password=get_password_hash("Operator123!"),
        )
        customer = User(
            name="Ana",
            last_name="Rodriguez",
            email="ana@ratingeats.com",
            username="anar",
            hashed_password=get_password_hash("Customer123!"),
        )
        db.add_all([owner, operator, customer])
        await db.flush()

        restaurant = Restaurant(
            owner_id=owner.id,
            name="La Arepera",
            description="Arepas, cachapas and Venezuelan breakfast all day",
            address="Av. Francisco de Miranda, Caracas",
            categories=["venezuelan", "breakfast"],
            geo_location=["10.4961,-66.8528"],
            schedule="Mon-Sun 07:00-22:00",
            capacity=60,
            email="contacto@laarepera.com",
            phone_number="04121234567",
            images=[
                RestaurantImage(url="uploads/laarepera/banner.jpg", alt="La Arepera banner", is_header=True),
            ],
        )
        db.add(restaurant)
        await db.flush()

        print(f"Created restaurant: {restaurant.name} (ID: {restaurant.id})")

        db.add_all([
            BusinessUser(user_id=owner.id, restaurant_id=restaurant.id, role=BusinessRole.OWNER),
            BusinessUser(user_id=operator.id, restaurant_id=restaurant.id, role=BusinessRole.OPERATOR),
        ])

        db.add(Reservation(
            restaurant_id=restaurant.id,
            user_id=customer.id,
            customer_name="Ana Rodriguez",
            phone_number="04149876543",
            date_reservation=date.today() + timedelta(days=3),
            time="20:00",
            number_of_guests=4,
            state=ReservationState.PENDING,
        ))
        db.add(Review(
            restaurant_id=restaurant.id,
            user_id=customer.id,
            rating=5,
            comment="Best reina pepiada in town",
        ))
        await db.commit()

        await update_rating(db, restaurant.id)

        print(f"""
Demo data created successfully!

Restaurant: {restaurant.name}
  ID: {restaurant.id}

Users:
  Owner:
    Email: maria@ratingeats.com
    Password: Owner123!

  Operator:
    Email: pedro@ratingeats.com
    Password: Operator123!

  Customer:
    Email: ana@ratingeats.com
    Password: Customer123!
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
