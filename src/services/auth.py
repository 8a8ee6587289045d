"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import AuthError, AuthErrorReason, ConflictError, InternalError, ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: str) -> str:
    """Create a signed, expiring access token for a user."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str | None) -> str:
    """Decode a token and return the user id it was issued for.

    Raises:
        AuthError: If the token is absent, expired, unsigned or carries no subject.
    """
    if not token:
        raise AuthError(AuthErrorReason.MISSING, "Not authenticated")

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise AuthError(AuthErrorReason.EXPIRED, "Token has expired") from e
    except JWTError as e:
        raise AuthError(AuthErrorReason.MALFORMED) from e

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthError(AuthErrorReason.MALFORMED)
    return user_id


def authenticate_token(db: Session, token: str | None) -> User:
    """Resolve a token to the user it was issued for."""
    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise AuthError(AuthErrorReason.UNKNOWN_SUBJECT, "User not found")
    return user


def resolve_access_token(db: Session, token: str | None) -> str:
    """Resolve a token to the id of an existing user."""
    return authenticate_token(db, token).id


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password."""
    if not email or not email.strip() or not password:
        raise ValidationError("Email and password are required")

    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise AuthError(AuthErrorReason.BAD_CREDENTIALS, "Incorrect email or password")

    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthError(AuthErrorReason.BAD_CREDENTIALS, "Incorrect email or password")
    return user


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user, rejecting duplicate emails."""
    username = (username or "").strip()
    if not username or not email or not email.strip() or not password:
        raise ValidationError("Username, email and password are required")

    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")

    user = User(
        username=username,
        email=normalize_email(email),
        password_hash=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to persist new user")
        raise InternalError() from e
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
