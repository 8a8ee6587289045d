"""Enums for model fields."""

from enum import Enum


class Priority(str, Enum):
    """How urgent an assignment is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AssignmentStatus(str, Enum):
    """Progress of an assignment. Any state may move to any other."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    def toggled(self) -> "AssignmentStatus":
        """Flip between completed and pending; in-progress counts as not done."""
        if self == AssignmentStatus.COMPLETED:
            return AssignmentStatus.PENDING
        return AssignmentStatus.COMPLETED


class AssignmentFilter(str, Enum):
    """Dashboard views over a user's assignments."""

    ALL = "all"
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    HIGH = "high"
    OVERDUE = "overdue"
