"""Pydantic schemas for request/response validation"""

from ratingeats.schemas.auth import (
    LoginRequest,
    UserCreate,
    AuthResponse,
    UserResponse,
)
from ratingeats.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
    RestaurantListResponse,
    RestaurantSummary,
    BusinessUserResponse,
    OperatorCreate,
    OperatorResponse,
)
from ratingeats.schemas.profile import (
    ProfileUpdate,
    ProfileResponse,
    MyRestaurant,
)
from ratingeats.schemas.menu import (
    MenuImageCreate,
    MenuImageUpdate,
    MenuImageResponse,
)
from ratingeats.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationTransitionResponse,
)
from ratingeats.schemas.post import (
    PostCreate,
    PostResponse,
    PostMessageResponse,
)
from ratingeats.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    ReviewCreatedResponse,
)
from ratingeats.schemas.notification import NotificationResponse

__all__ = [
    "LoginRequest",
    "UserCreate",
    "AuthResponse",
    "UserResponse",
    "RestaurantCreate",
    "RestaurantUpdate",
    "RestaurantResponse",
    "RestaurantListResponse",
    "RestaurantSummary",
    "BusinessUserResponse",
    "OperatorCreate",
    "OperatorResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "MyRestaurant",
    "MenuImageCreate",
    "MenuImageUpdate",
    "MenuImageResponse",
    "ReservationCreate",
    "ReservationResponse",
    "ReservationTransitionResponse",
    "PostCreate",
    "PostResponse",
    "PostMessageResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ReviewCreatedResponse",
    "NotificationResponse",
]
