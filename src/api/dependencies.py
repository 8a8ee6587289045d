"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import AuthError, AuthErrorReason
from src.models.user import User
from src.services.assignment_service import AssignmentService
from src.services.auth import authenticate_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the Bearer token."""
    if credentials is None:
        if request.headers.get("Authorization"):
            # Header present but not in "Bearer <token>" form
            logger.warning("Rejected Authorization header without Bearer scheme")
            raise AuthError(
                AuthErrorReason.MALFORMED,
                "Authorization header must use the Bearer scheme",
            )
        raise AuthError(AuthErrorReason.MISSING, "Not authenticated")

    try:
        return authenticate_token(db, credentials.credentials)
    except AuthError as e:
        logger.warning(f"Rejected token: {e.reason.value}")
        raise


def get_assignment_service(
    db: Annotated[Session, Depends(get_db)],
) -> AssignmentService:
    """Get assignment service with dependencies."""
    return AssignmentService(db)
