"""Restaurant models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, JSON, Text, Uuid
from sqlalchemy.orm import relationship

from ratingeats.database import Base


class Restaurant(Base):
    """Restaurant listing, aggregate root for reviews and reservations"""
    __tablename__ = "restaurants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False)

    # Listing
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(String(200), nullable=False)
    categories = Column(JSON, nullable=False, default=list)  # ["italian", "pizza", ...]
    geo_location = Column(JSON, nullable=False, default=list)  # ["10.48,-66.90"]
    schedule = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)

    # Contact
    email = Column(String(255), unique=True, nullable=False)
    phone_number = Column(String(20), unique=True, nullable=False)

    # Denormalized review aggregate
    average_rating = Column(Float, default=0, nullable=False)
    num_reviews = Column(Integer, default=0, nullable=False)

    # Soft delete
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(DateTime)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    images = relationship(
        "RestaurantImage",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="RestaurantImage.uploaded_at",
        lazy="selectin",
    )


class RestaurantImage(Base):
    """Gallery and banner images of a restaurant"""
    __tablename__ = "restaurant_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False)
    url = Column(String(500), nullable=False)  # relative path under uploads/
    alt = Column(String(200))
    is_header = Column(Boolean, default=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="images")
