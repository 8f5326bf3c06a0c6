from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from datetime import datetime

from spendfy.db.core import CategoryDB
from spendfy.exceptions import ConflictError
from spendfy.models.category import CategoryRequest
from spendfy.crud.ownership import get_authenticated_user, get_owned
from spendfy.logging_config import get_logger

logger = get_logger(__name__)


def _category_name_taken(db: Session, user_id: int, name: str) -> bool:
    return db.query(CategoryDB).filter(
        CategoryDB.user_id == user_id,
        CategoryDB.name == name
    ).first() is not None


def create_db_category(db: Session, user_id: int, category_data: CategoryRequest) -> CategoryDB:
    """Create a new category for a user"""

    get_authenticated_user(db, user_id)

    if _category_name_taken(db, user_id, category_data.name):
        raise ConflictError(f"Category with name '{category_data.name}' already exists")

    db_category = CategoryDB(
        user_id=user_id,
        name=category_data.name,
        color=category_data.color,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    try:
        db.add(db_category)
        db.commit()
        db.refresh(db_category)
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Category with name '{category_data.name}' already exists")

    logger.info(f"Created category {db_category.id} for user {user_id}")
    return db_category

def read_db_categories(db: Session, user_id: int) -> List[CategoryDB]:
    """Read all categories of a user in creation order"""
    get_authenticated_user(db, user_id)
    return db.query(CategoryDB).filter(CategoryDB.user_id == user_id).order_by(CategoryDB.id).all()

def read_db_category(db: Session, category_id: int, user_id: int) -> CategoryDB:
    """Read a single category owned by the user"""
    get_authenticated_user(db, user_id)
    return get_owned(db, CategoryDB, category_id, user_id, "Category")

def update_db_category(db: Session, category_id: int, user_id: int, category_data: CategoryRequest) -> CategoryDB:
    """Replace a category's name and color"""
    get_authenticated_user(db, user_id)
    db_category = get_owned(db, CategoryDB, category_id, user_id, "Category")

    if category_data.name != db_category.name and _category_name_taken(db, user_id, category_data.name):
        raise ConflictError(f"Category with name '{category_data.name}' already exists")

    db_category.name = category_data.name
    db_category.color = category_data.color
    db_category.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(db_category)
        return db_category
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Category with name '{category_data.name}' already exists")

def delete_db_category(db: Session, category_id: int, user_id: int) -> bool:
    """Delete a category along with its budgets and transactions"""
    get_authenticated_user(db, user_id)
    db_category = get_owned(db, CategoryDB, category_id, user_id, "Category")

    db.delete(db_category)
    db.commit()
    logger.info(f"Deleted category {category_id} for user {user_id}")
    return True
