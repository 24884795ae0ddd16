from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, AuthResponse
)

__all__ = [
    "User",
    "UserCreate", "UserLogin", "UserResponse", "AuthResponse",
]
