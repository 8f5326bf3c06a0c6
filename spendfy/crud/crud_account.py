from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from datetime import datetime

from spendfy.db.core import AccountDB
from spendfy.exceptions import ConflictError
from spendfy.models.account import AccountRequest
from spendfy.crud.ownership import get_authenticated_user, get_owned
from spendfy.logging_config import get_logger

logger = get_logger(__name__)


def _account_name_taken(db: Session, user_id: int, account_name: str) -> bool:
    return db.query(AccountDB).filter(
        AccountDB.user_id == user_id,
        AccountDB.account_name == account_name
    ).first() is not None


# ===== DATABASE OPERATIONS =====

def create_db_account(db: Session, user_id: int, account_data: AccountRequest) -> AccountDB:
    """Create a new account for a user"""

    get_authenticated_user(db, user_id)

    if _account_name_taken(db, user_id, account_data.account_name):
        raise ConflictError(f"Account name '{account_data.account_name}' already exists")

    db_account = AccountDB(
        user_id=user_id,
        account_name=account_data.account_name,
        account_type=account_data.account_type,
        initial_balance=account_data.initial_balance,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    try:
        db.add(db_account)
        db.commit()
        db.refresh(db_account)
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Account name '{account_data.account_name}' already exists")

    logger.info(f"Created account {db_account.id} for user {user_id}")
    return db_account


def read_db_account(db: Session, account_id: int, user_id: int) -> AccountDB:
    """Read an account owned by the user"""
    get_authenticated_user(db, user_id)
    return get_owned(db, AccountDB, account_id, user_id, "Account")


def read_db_accounts(db: Session, user_id: int) -> List[AccountDB]:
    """Read all accounts of a user in creation order"""
    get_authenticated_user(db, user_id)
    return db.query(AccountDB).filter(AccountDB.user_id == user_id).order_by(AccountDB.id).all()


def update_db_account(db: Session, account_id: int, user_id: int, account_data: AccountRequest) -> AccountDB:
    """Replace the fields of an existing account"""

    get_authenticated_user(db, user_id)
    db_account = get_owned(db, AccountDB, account_id, user_id, "Account")

    # Only check for name uniqueness if the name is actually changing
    if account_data.account_name != db_account.account_name and \
            _account_name_taken(db, user_id, account_data.account_name):
        raise ConflictError(f"Account name '{account_data.account_name}' already exists")

    db_account.account_name = account_data.account_name
    db_account.account_type = account_data.account_type
    db_account.initial_balance = account_data.initial_balance
    db_account.updated_at = datetime.utcnow()

    try:
        db.commit()
        db.refresh(db_account)
        return db_account
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Account name '{account_data.account_name}' already exists")


def delete_db_account(db: Session, account_id: int, user_id: int) -> bool:
    """Delete an account and its transactions"""

    get_authenticated_user(db, user_id)
    db_account = get_owned(db, AccountDB, account_id, user_id, "Account")

    db.delete(db_account)
    db.commit()
    logger.info(f"Deleted account {account_id} for user {user_id}")
    return True
