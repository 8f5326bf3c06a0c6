from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
from datetime import datetime

from spendfy.db.core import UserDB, UserStatus
from spendfy.exceptions import NotFoundError, DuplicateIdentityError, AuthenticationFailedError
from spendfy.models.user import RegisterRequest, LoginRequest, AuthResponse
from spendfy.security import hash_password, verify_password, create_access_token
from spendfy.logging_config import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


def _auth_response(user: UserDB) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.email),
        id=user.id,
        name=user.name,
        email=user.email,
    )


# ===== DATABASE OPERATIONS =====

def read_db_user(db: Session, user_id: int = None, email: str = None) -> Optional[UserDB]:
    """Read a user by id or by exact email"""
    query = db.query(UserDB)

    if user_id is not None:
        return query.filter(UserDB.id == user_id).first()
    elif email is not None:
        return query.filter(UserDB.email == email).first()
    else:
        raise ValueError("Must provide at least one identifier (user_id or email)")


def register_user(db: Session, user_data: RegisterRequest) -> AuthResponse:
    """Create an active user and issue a token for it"""

    if read_db_user(db, email=user_data.email):
        raise DuplicateIdentityError("Email already registered")

    db_user = UserDB(
        name=user_data.name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        status=UserStatus.ACTIVE,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    try:
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise DuplicateIdentityError("Email already registered")

    logger.info(f"Registered user {db_user.id}")
    return _auth_response(db_user)


def authenticate_user(db: Session, email: str, password: str) -> Optional[UserDB]:
    """Return the active user matching email and password, or None"""

    user = read_db_user(db, email=email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    if not user.is_active:
        return None

    return user


def login_user(db: Session, credentials: LoginRequest) -> AuthResponse:
    """Verify credentials and issue a token"""
    user = authenticate_user(db, email=credentials.email, password=credentials.password)
    if not user:
        logger.warning("Failed login attempt")
        raise AuthenticationFailedError(INVALID_CREDENTIALS)
    return _auth_response(user)


def delete_db_user(db: Session, user_id: int) -> bool:
    """Delete a user together with every account, category, budget and transaction it owns"""

    db_user = db.query(UserDB).filter(UserDB.id == user_id).first()
    if not db_user:
        raise NotFoundError(f"User with id {user_id} not found")

    db.delete(db_user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
    return True
