"""Assignment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_assignment_service, get_current_user
from src.models.enums import AssignmentFilter
from src.models.user import User
from src.schemas.assignment import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentStats,
    AssignmentUpdate,
    MessageResponse,
)
from src.services.assignment_service import AssignmentService

router = APIRouter(prefix="/api/assignments", tags=["assignments"])

CurrentUser = Annotated[User, Depends(get_current_user)]
Service = Annotated[AssignmentService, Depends(get_assignment_service)]


@router.get("", response_model=list[AssignmentResponse])
def get_assignments(
    current_user: CurrentUser,
    service: Service,
    view: AssignmentFilter = Query(
        default=AssignmentFilter.ALL,
        alias="filter",
        description="Dashboard view: all, pending, in-progress, completed, high, overdue",
    ),
):
    """Get the current user's assignments."""
    return service.list_for_owner(current_user.id, view)


@router.get("/stats", response_model=AssignmentStats)
def get_assignment_stats(current_user: CurrentUser, service: Service):
    """Get assignment counts for the dashboard."""
    return service.stats_for_owner(current_user.id)


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
def create_assignment(
    assignment_data: AssignmentCreate,
    current_user: CurrentUser,
    service: Service,
):
    """Create a new assignment owned by the current user."""
    return service.create(current_user.id, assignment_data.model_dump(exclude_unset=True))


@router.get("/{assignment_id}", response_model=AssignmentResponse)
def get_assignment(assignment_id: str, current_user: CurrentUser, service: Service):
    """Get a single assignment."""
    return service.get(current_user.id, assignment_id)


@router.put("/{assignment_id}", response_model=AssignmentResponse)
def update_assignment(
    assignment_id: str,
    assignment_data: AssignmentUpdate,
    current_user: CurrentUser,
    service: Service,
):
    """Update an assignment. Fields left out of the body are unchanged."""
    return service.update(
        current_user.id, assignment_id, assignment_data.model_dump(exclude_unset=True)
    )


@router.post("/{assignment_id}/toggle", response_model=AssignmentResponse)
def toggle_assignment(assignment_id: str, current_user: CurrentUser, service: Service):
    """Toggle an assignment between completed and pending."""
    return service.toggle_status(current_user.id, assignment_id)


@router.delete("/{assignment_id}", response_model=MessageResponse)
def delete_assignment(assignment_id: str, current_user: CurrentUser, service: Service):
    """Permanently delete an assignment."""
    service.delete(current_user.id, assignment_id)
    return MessageResponse(message="Assignment deleted successfully")
