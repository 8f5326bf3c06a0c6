"""
Budget period rules.

A budget caps spending for one category over an inclusive date range
[start_date, end_date]. For a given user and category no two budgets may
share a day. Ranges that merely touch (Jan 1-31 followed by Feb 1-29) are
fine, and a single-day budget (start == end) is valid.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from spendfy.db.core import BudgetDB
from spendfy.exceptions import ConflictError, InvalidRangeError
from spendfy.logging_config import get_logger

logger = get_logger(__name__)


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """True when the inclusive ranges share at least one day"""
    return start_a <= end_b and start_b <= end_a


def validate_budget_period(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise InvalidRangeError("end_date must not be before start_date")


def find_overlapping_budgets(db: Session, user_id: int, category_id: int,
                             start_date: date, end_date: date,
                             exclude_budget_id: Optional[int] = None) -> List[BudgetDB]:
    """Budgets of this user and category whose period shares a day with [start_date, end_date]"""
    query = db.query(BudgetDB).filter(
        BudgetDB.user_id == user_id,
        BudgetDB.category_id == category_id,
        BudgetDB.start_date <= end_date,
        BudgetDB.end_date >= start_date,
    )
    if exclude_budget_id is not None:
        query = query.filter(BudgetDB.id != exclude_budget_id)
    return query.order_by(BudgetDB.start_date).all()


def ensure_no_overlap(db: Session, user_id: int, category_id: int,
                      start_date: date, end_date: date,
                      exclude_budget_id: Optional[int] = None) -> None:
    overlapping = find_overlapping_budgets(
        db, user_id, category_id, start_date, end_date, exclude_budget_id=exclude_budget_id
    )
    if overlapping:
        conflict = overlapping[0]
        logger.warning(
            f"Budget period {start_date}..{end_date} for user {user_id}, category {category_id} "
            f"overlaps budget {conflict.id} ({conflict.start_date}..{conflict.end_date})"
        )
        raise ConflictError("A budget already exists for this category in the given period")
