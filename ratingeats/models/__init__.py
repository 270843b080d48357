"""Database models"""

from ratingeats.models.user import User, favorite_restaurants
from ratingeats.models.business_user import BusinessUser, BusinessRole, STAFF_ROLES
from ratingeats.models.restaurant import Restaurant, RestaurantImage
from ratingeats.models.menu import MenuImage
from ratingeats.models.reservation import Reservation, ReservationState
from ratingeats.models.post import Post, PostState
from ratingeats.models.review import Review
from ratingeats.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "favorite_restaurants",
    "BusinessUser",
    "BusinessRole",
    "STAFF_ROLES",
    "Restaurant",
    "RestaurantImage",
    "MenuImage",
    "Reservation",
    "ReservationState",
    "Post",
    "PostState",
    "Review",
    "Notification",
    "NotificationType",
]
