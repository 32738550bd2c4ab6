"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel

from .base import CamelModel
from ....domain.models import User


class UserResponse(CamelModel):
    """Public view of an account; the password hash never leaves the server."""

    id: str
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(BaseModel):
    """Response schema for register, login and profile lookups."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
