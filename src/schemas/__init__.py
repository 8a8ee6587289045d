"""Pydantic schemas for API requests and responses."""

from src.schemas.assignment import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentStats,
    AssignmentUpdate,
    MessageResponse,
)
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "AssignmentCreate",
    "AssignmentUpdate",
    "AssignmentResponse",
    "AssignmentStats",
    "MessageResponse",
]
