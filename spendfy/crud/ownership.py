from typing import Type, TypeVar

from sqlalchemy.orm import Session

from spendfy.db.core import Base, UserDB
from spendfy.exceptions import NotFoundError, ForbiddenError
from spendfy.logging_config import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def get_authenticated_user(db: Session, user_id: int) -> UserDB:
    """Load the calling user, failing with NotFoundError if it no longer exists"""
    user = db.query(UserDB).filter(UserDB.id == user_id).first()
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def get_owned(db: Session, model: Type[ModelT], entity_id: int, user_id: int,
              label: str, for_update: bool = False) -> ModelT:
    """
    Load ``model`` by primary key and check that ``user_id`` owns it.

    Raises NotFoundError when the row is missing and ForbiddenError when it
    belongs to someone else. ``for_update`` locks the row until the end of
    the current transaction on backends that support SELECT ... FOR UPDATE.
    """
    query = db.query(model).filter(model.id == entity_id)
    if for_update:
        query = query.with_for_update()
    entity = query.first()

    if entity is None:
        raise NotFoundError(f"{label} with id {entity_id} not found")

    if entity.user_id != user_id:
        logger.warning(f"User {user_id} attempted to access {label.lower()} {entity_id} owned by another user")
        raise ForbiddenError(f"{label} does not belong to authenticated user")

    return entity
