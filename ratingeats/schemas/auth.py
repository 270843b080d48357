"""Authentication schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, field_validator

from ratingeats.schemas.validators import PersonName, LastName, Username, Password


class LoginRequest(BaseModel):
    """Login request"""
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserCreate(BaseModel):
    """Register user request"""
    name: PersonName
    last_name: LastName
    email: EmailStr
    username: Username
    password: Password

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class AuthResponse(BaseModel):
    """Register/login response carrying the bearer token"""
    id: UUID
    name: str
    email: str
    username: Optional[str] = None
    token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """User response"""
    id: UUID
    name: str
    last_name: str
    email: str
    username: str
    biography: Optional[str]
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime]

    class Config:
        from_attributes = True
