"""Assignment schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import AssignmentStatus, Priority
from src.schemas.base import CamelModel


class AssignmentCreate(CamelModel):
    """Create a new assignment.

    Required fields are checked by the service so that a missing title or
    course is reported the same way whether the request came over HTTP or not.
    """

    title: str | None = Field(None, max_length=255)
    course: str | None = Field(None, max_length=255)
    due_date: date | None = None
    priority: Priority | None = None
    status: AssignmentStatus | None = None
    description: str | None = Field(None, max_length=2000)


class AssignmentUpdate(CamelModel):
    """Update an assignment. Only fields present in the body are applied."""

    title: str | None = Field(None, max_length=255)
    course: str | None = Field(None, max_length=255)
    due_date: date | None = None
    priority: Priority | None = None
    status: AssignmentStatus | None = None
    description: str | None = Field(None, max_length=2000)


class AssignmentResponse(CamelModel):
    """Assignment response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    course: str
    due_date: date
    priority: Priority
    status: AssignmentStatus
    description: str | None
    created_at: datetime
    updated_at: datetime
    is_overdue: bool = False


class AssignmentStats(CamelModel):
    """Per-status counts for the dashboard."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    high_priority: int = 0
    overdue: int = 0


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
