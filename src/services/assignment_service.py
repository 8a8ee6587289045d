"""Assignment service: owner-scoped CRUD over assignments."""

import logging
from collections.abc import Mapping
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from src.config import get_settings
from src.exceptions import InternalError, NotFoundError, ValidationError
from src.models.assignment import Assignment
from src.models.enums import AssignmentFilter, AssignmentStatus, Priority

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("title", "course")
EDITABLE_FIELDS = ("title", "course", "due_date", "priority", "status", "description")
STATUS_FILTERS = (
    AssignmentFilter.PENDING,
    AssignmentFilter.IN_PROGRESS,
    AssignmentFilter.COMPLETED,
)


class AssignmentService:
    """Service enforcing per-owner access to assignments.

    Every lookup filters on both the assignment id and the owner id, so an
    assignment that belongs to someone else is indistinguishable from one that
    does not exist.
    """

    def __init__(self, db: Session, reject_past_due_dates: bool | None = None):
        self.db = db
        if reject_past_due_dates is None:
            reject_past_due_dates = get_settings().reject_past_due_dates
        self.reject_past_due_dates = reject_past_due_dates

    def _owned(self, owner_id: str) -> Query:
        return self.db.query(Assignment).filter(Assignment.owner_id == owner_id)

    def list_for_owner(
        self,
        owner_id: str,
        view: AssignmentFilter = AssignmentFilter.ALL,
        today: date | None = None,
    ) -> list[Assignment]:
        """List the owner's assignments, optionally narrowed to a dashboard view."""
        today = today or date.today()
        query = self._owned(owner_id)

        if view in STATUS_FILTERS:
            query = query.filter(Assignment.status == view.value)
        elif view == AssignmentFilter.HIGH:
            query = query.filter(Assignment.priority == Priority.HIGH.value)
        elif view == AssignmentFilter.OVERDUE:
            query = query.filter(
                Assignment.due_date < today,
                Assignment.status != AssignmentStatus.COMPLETED.value,
            )

        return query.order_by(Assignment.due_date, Assignment.created_at, Assignment.id).all()

    def stats_for_owner(self, owner_id: str, today: date | None = None) -> dict[str, int]:
        """Count the owner's assignments by status, priority and lateness."""
        today = today or date.today()

        by_status = dict(
            self.db.query(Assignment.status, func.count(Assignment.id))
            .filter(Assignment.owner_id == owner_id)
            .group_by(Assignment.status)
            .all()
        )
        high_priority = (
            self._owned(owner_id).filter(Assignment.priority == Priority.HIGH.value).count()
        )
        overdue = (
            self._owned(owner_id)
            .filter(
                Assignment.due_date < today,
                Assignment.status != AssignmentStatus.COMPLETED.value,
            )
            .count()
        )

        return {
            "total": sum(by_status.values()),
            "pending": by_status.get(AssignmentStatus.PENDING.value, 0),
            "in_progress": by_status.get(AssignmentStatus.IN_PROGRESS.value, 0),
            "completed": by_status.get(AssignmentStatus.COMPLETED.value, 0),
            "high_priority": high_priority,
            "overdue": overdue,
        }

    def get(self, owner_id: str, assignment_id: str) -> Assignment:
        """Get one of the owner's assignments."""
        assignment = self._owned(owner_id).filter(Assignment.id == assignment_id).first()
        if assignment is None:
            raise NotFoundError("Assignment not found")
        return assignment

    def create(self, owner_id: str, fields: Mapping[str, Any]) -> Assignment:
        """Create an assignment for the owner.

        Client-supplied ids, owners and timestamps are ignored.
        """
        values = self._clean(fields)

        missing = [name for name in REQUIRED_TEXT_FIELDS if not values.get(name)]
        if values.get("due_date") is None:
            missing.append("due_date")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        assignment = Assignment(
            owner_id=owner_id,
            title=values["title"],
            course=values["course"],
            due_date=values["due_date"],
            priority=values.get("priority") or Priority.MEDIUM.value,
            status=values.get("status") or AssignmentStatus.PENDING.value,
            description=values.get("description"),
        )
        self.db.add(assignment)
        self._commit()
        self.db.refresh(assignment)

        logger.info(f"Created assignment {assignment.id} for user {owner_id}")
        return assignment

    def update(self, owner_id: str, assignment_id: str, fields: Mapping[str, Any]) -> Assignment:
        """Apply the supplied fields to one of the owner's assignments."""
        assignment = self.get(owner_id, assignment_id)
        values = self._clean(fields)

        for name in (*REQUIRED_TEXT_FIELDS, "due_date", "priority", "status"):
            if name in values and not values[name]:
                raise ValidationError(f"{name} cannot be empty")

        for name, value in values.items():
            setattr(assignment, name, value)
        assignment.updated_at = datetime.now(UTC)

        self._commit()
        self.db.refresh(assignment)

        logger.info(f"Updated assignment {assignment.id}: {sorted(values)}")
        return assignment

    def delete(self, owner_id: str, assignment_id: str) -> None:
        """Permanently delete one of the owner's assignments."""
        assignment = self.get(owner_id, assignment_id)
        self.db.delete(assignment)
        self._commit()

        logger.info(f"Deleted assignment {assignment_id} for user {owner_id}")

    def toggle_status(self, owner_id: str, assignment_id: str) -> Assignment:
        """Flip an assignment between completed and pending."""
        assignment = self.get(owner_id, assignment_id)
        new_status = AssignmentStatus(assignment.status).toggled()
        return self.update(owner_id, assignment_id, {"status": new_status})

    def _clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Keep editable fields and coerce them to their stored form."""
        values: dict[str, Any] = {}
        for name in EDITABLE_FIELDS:
            if name not in fields:
                continue
            value = fields[name]

            if name in ("title", "course", "description") and value is not None:
                if not isinstance(value, str):
                    raise ValidationError(f"{name} must be a string")
                value = value.strip()

            if name == "description":
                value = value or None
            elif name == "due_date":
                value = self._parse_due_date(value)
            elif name == "priority" and value is not None:
                value = _enum_value(Priority, value, name)
            elif name == "status" and value is not None:
                value = _enum_value(AssignmentStatus, value, name)

            values[name] = value
        return values

    def _parse_due_date(self, value: Any) -> date | None:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            value = value.date()
        elif isinstance(value, str):
            value = _parse_iso_date(value)
        elif not isinstance(value, date):
            raise ValidationError(f"Invalid due date: {value}")

        if self.reject_past_due_dates and value < date.today():
            raise ValidationError("Due date cannot be in the past")
        return value

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to persist assignment change")
            raise InternalError() from e


def _enum_value(enum_cls: type[Enum], value: Any, name: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {name}: {value!r} (expected one of {allowed})") from e


def _parse_iso_date(value: str) -> date:
    """Parse an ISO date, or the date part of a full ISO datetime."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError as e:
        raise ValidationError(f"Invalid due date: {value}") from e
