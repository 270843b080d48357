"""Menu models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid

from ratingeats.database import Base


class MenuImage(Base):
    """Pages of a restaurant menu, stored as uploaded images"""
    __tablename__ = "menu_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)
    url = Column(String(500), nullable=False)
    alt = Column(String(200))
    uploaded_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
