"""Role assignments of users over restaurants"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ratingeats.database import Base


class BusinessRole(str, enum.Enum):
    """Staff roles over a single restaurant"""
    OWNER = "owner"
    OPERATOR = "operator"


STAFF_ROLES = (BusinessRole.OWNER, BusinessRole.OPERATOR)


class BusinessUser(Base):
    """Grants a user one role over exactly one restaurant"""
    __tablename__ = "business_users"
    __table_args__ = (
        UniqueConstraint("user_id", "restaurant_id", name="uq_business_user_restaurant"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False)
    role = Column(Enum(BusinessRole), nullable=False, default=BusinessRole.OPERATOR)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", lazy="joined")
    restaurant = relationship("Restaurant", lazy="joined")
