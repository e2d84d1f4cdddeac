from pydantic import EmailStr, Field

from chat_app.models.base import BaseEntity, BaseCreateSchema


class UserCreate(BaseCreateSchema):
    """Schema for user creation request."""
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class User(BaseEntity):
    """User identity. Immutable after creation apart from timestamps."""
    id: str
    name: str
    email: str
