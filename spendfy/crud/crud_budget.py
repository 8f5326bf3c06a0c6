from sqlalchemy.orm import Session, joinedload
from typing import List
from datetime import datetime

from spendfy.db.core import BudgetDB, CategoryDB
from spendfy.models.budget import BudgetRequest
from spendfy.crud.ownership import get_authenticated_user, get_owned
from spendfy.services.budget_overlap import validate_budget_period, ensure_no_overlap
from spendfy.logging_config import get_logger

logger = get_logger(__name__)


def _lock_category(db: Session, category_id: int, user_id: int) -> CategoryDB:
    # Row lock held until commit on databases that support FOR UPDATE;
    # SQLite engines get the same serialization from BEGIN IMMEDIATE.
    return get_owned(db, CategoryDB, category_id, user_id, "Category", for_update=True)


# ===== DATABASE OPERATIONS =====

def create_db_budget(db: Session, user_id: int, budget_data: BudgetRequest) -> BudgetDB:
    """
    Create a budget for one of the user's categories.

    Checks run in this order and stop at the first failure:
    period ordering, caller, category existence and ownership, overlap
    with the other budgets of that category.
    """
    validate_budget_period(budget_data.start_date, budget_data.end_date)

    get_authenticated_user(db, user_id)
    category = _lock_category(db, budget_data.category_id, user_id)

    ensure_no_overlap(db, user_id, category.id, budget_data.start_date, budget_data.end_date)

    db_budget = BudgetDB(
        user_id=user_id,
        category_id=category.id,
        limit_amount=budget_data.limit_amount,
        start_date=budget_data.start_date,
        end_date=budget_data.end_date,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    logger.info(f"Created budget {db_budget.id} for user {user_id}, category {category.id}")
    return db_budget


def read_db_budget(db: Session, budget_id: int, user_id: int) -> BudgetDB:
    """Read a budget owned by the user"""
    get_authenticated_user(db, user_id)
    return get_owned(db, BudgetDB, budget_id, user_id, "Budget")


def read_db_budgets(db: Session, user_id: int) -> List[BudgetDB]:
    """Read all budgets of a user in creation order"""
    get_authenticated_user(db, user_id)
    return (
        db.query(BudgetDB)
        .options(joinedload(BudgetDB.category))
        .filter(BudgetDB.user_id == user_id)
        .order_by(BudgetDB.id)
        .all()
    )


def update_db_budget(db: Session, budget_id: int, user_id: int, budget_data: BudgetRequest) -> BudgetDB:
    """Replace a budget's limit, period and category; the budget itself never counts as an overlap"""

    validate_budget_period(budget_data.start_date, budget_data.end_date)

    get_authenticated_user(db, user_id)
    db_budget = get_owned(db, BudgetDB, budget_id, user_id, "Budget")
    category = _lock_category(db, budget_data.category_id, user_id)

    ensure_no_overlap(
        db, user_id, category.id, budget_data.start_date, budget_data.end_date,
        exclude_budget_id=budget_id
    )

    db_budget.limit_amount = budget_data.limit_amount
    db_budget.start_date = budget_data.start_date
    db_budget.end_date = budget_data.end_date
    db_budget.category_id = category.id
    db_budget.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(db_budget)
    return db_budget


def delete_db_budget(db: Session, budget_id: int, user_id: int) -> bool:
    """Delete a budget"""

    get_authenticated_user(db, user_id)
    db_budget = get_owned(db, BudgetDB, budget_id, user_id, "Budget")

    db.delete(db_budget)
    db.commit()
    logger.info(f"Deleted budget {budget_id} for user {user_id}")
    return True
