"""Assignment model."""

from datetime import date

from sqlalchemy import Column, Date, ForeignKey, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import AssignmentStatus, Priority
from src.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Assignment(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A piece of coursework owned by exactly one user."""

    __tablename__ = "assignments"

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    course = Column(String(255), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    priority = Column(String(20), nullable=False, default=Priority.MEDIUM.value)
    status = Column(String(20), nullable=False, default=AssignmentStatus.PENDING.value, index=True)
    description = Column(String(2000), nullable=True)

    # Relationships
    owner = relationship("User", backref="assignments")

    def is_overdue_on(self, today: date) -> bool:
        """Check if the due date has passed without the work being completed."""
        return self.due_date < today and self.status != AssignmentStatus.COMPLETED.value

    @property
    def is_overdue(self) -> bool:
        """Check if the assignment is overdue as of today."""
        return self.is_overdue_on(date.today())
