from sqlalchemy.orm import Session, joinedload
from typing import List, Tuple
from datetime import datetime

from spendfy.db.core import TransactionDB, AccountDB, CategoryDB
from spendfy.models.transaction import TransactionRequest
from spendfy.crud.ownership import get_authenticated_user, get_owned
from spendfy.logging_config import get_logger

logger = get_logger(__name__)


# ===== UTILITY FUNCTIONS =====

def clean_text(value):
    """Collapse runs of whitespace; blank strings become None"""
    if value is None:
        return None
    cleaned = " ".join(value.split())
    return cleaned or None


def _resolve_references(db: Session, user_id: int, transaction_data: TransactionRequest) -> Tuple[AccountDB, CategoryDB]:
    """The account is checked before the category, each for existence then ownership"""
    account = get_owned(db, AccountDB, transaction_data.account_id, user_id, "Account")
    category = get_owned(db, CategoryDB, transaction_data.category_id, user_id, "Category")
    return account, category


# ===== DATABASE OPERATIONS =====

def create_db_transaction(db: Session, user_id: int, transaction_data: TransactionRequest) -> TransactionDB:
    """Create a new transaction against one of the user's accounts and categories"""

    get_authenticated_user(db, user_id)
    account, category = _resolve_references(db, user_id, transaction_data)

    db_transaction = TransactionDB(
        user_id=user_id,
        account_id=account.id,
        category_id=category.id,
        transaction_type=transaction_data.transaction_type,
        transaction_date=transaction_data.transaction_date,
        amount=transaction_data.amount,
        description=clean_text(transaction_data.description),
        notes=transaction_data.notes,
        status=transaction_data.status,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow()
    )

    db.add(db_transaction)
    db.commit()
    db.refresh(db_transaction)
    logger.info(f"Created transaction {db_transaction.id} for user {user_id}")
    return db_transaction


def read_db_transaction(db: Session, transaction_id: int, user_id: int) -> TransactionDB:
    """Read a transaction owned by the user"""
    get_authenticated_user(db, user_id)
    return get_owned(db, TransactionDB, transaction_id, user_id, "Transaction")


def read_db_transactions(db: Session, user_id: int) -> List[TransactionDB]:
    """Read all transactions of a user in creation order"""
    get_authenticated_user(db, user_id)
    return (
        db.query(TransactionDB)
        .options(joinedload(TransactionDB.account), joinedload(TransactionDB.category))
        .filter(TransactionDB.user_id == user_id)
        .order_by(TransactionDB.id)
        .all()
    )


def update_db_transaction(db: Session, transaction_id: int, user_id: int, transaction_data: TransactionRequest) -> TransactionDB:
    """Replace every field of an existing transaction"""

    get_authenticated_user(db, user_id)
    db_transaction = get_owned(db, TransactionDB, transaction_id, user_id, "Transaction")
    account, category = _resolve_references(db, user_id, transaction_data)

    db_transaction.transaction_type = transaction_data.transaction_type
    db_transaction.transaction_date = transaction_data.transaction_date
    db_transaction.amount = transaction_data.amount
    db_transaction.description = clean_text(transaction_data.description)
    db_transaction.notes = transaction_data.notes
    db_transaction.status = transaction_data.status
    db_transaction.account_id = account.id
    db_transaction.category_id = category.id
    db_transaction.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(db_transaction)
    return db_transaction


def delete_db_transaction(db: Session, transaction_id: int, user_id: int) -> bool:
    """Delete a transaction"""

    get_authenticated_user(db, user_id)
    db_transaction = get_owned(db, TransactionDB, transaction_id, user_id, "Transaction")

    db.delete(db_transaction)
    db.commit()
    logger.info(f"Deleted transaction {transaction_id} for user {user_id}")
    return True
