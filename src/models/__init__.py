"""SQLAlchemy models."""

from src.models.assignment import Assignment
from src.models.user import User

__all__ = [
    "User",
    "Assignment",
]
