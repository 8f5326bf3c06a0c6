from typing import Optional
from sqlalchemy import create_engine, event, ForeignKey, Index, UniqueConstraint, CheckConstraint, String, DECIMAL, DateTime, Date
from sqlalchemy.engine import Engine
from sqlalchemy.types import Enum
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Mapped, relationship, mapped_column
from datetime import datetime, date
from decimal import Decimal
import enum
import sqlite3

from spendfy.config import DATABASE_URL, SQL_ECHO


class Base(DeclarativeBase):
    pass


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class UserStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class UserDB(Base):
    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("email", name="uq_user_email"),
        Index("idx_users_email", "email"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[UserStatus] = mapped_column(Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE)

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    accounts = relationship("AccountDB", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    categories = relationship("CategoryDB", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    budgets = relationship("BudgetDB", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    transactions = relationship("TransactionDB", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


class AccountDB(Base):
    __tablename__ = "accounts"

    __table_args__ = (
        # Prevent duplicate account names per user
        UniqueConstraint("user_id", "account_name", name="uq_user_account_name"),
        Index("idx_accounts_user", "user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    account_name: Mapped[str] = mapped_column(String(50), nullable=False)
    account_type: Mapped[str] = mapped_column(String(30), nullable=False)  # "Checking", "Wallet", ...
    initial_balance: Mapped[Decimal] = mapped_column(DECIMAL(15, 2), nullable=False)

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("UserDB", back_populates="accounts")
    transactions = relationship("TransactionDB", back_populates="account", cascade="all, delete-orphan", passive_deletes=True)


class CategoryDB(Base):
    __tablename__ = "categories"

    __table_args__ = (
        # Prevent duplicate category names per user
        UniqueConstraint("user_id", "name", name="uq_user_category_name"),
        Index("idx_categories_user", "user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[Optional[str]] = mapped_column(String(20))

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("UserDB", back_populates="categories")
    budgets = relationship("BudgetDB", back_populates="category", cascade="all, delete-orphan", passive_deletes=True)
    transactions = relationship("TransactionDB", back_populates="category", cascade="all, delete-orphan", passive_deletes=True)


class BudgetDB(Base):
    __tablename__ = "budgets"

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_budget_period"),
        # Overlap lookups are always scoped to one user and category
        Index("idx_budgets_user_category_period", "user_id", "category_id", "start_date", "end_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    limit_amount: Mapped[Decimal] = mapped_column(DECIMAL(15, 2), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("UserDB", back_populates="budgets")
    category = relationship("CategoryDB", back_populates="budgets")

    @property
    def category_name(self) -> str:
        return self.category.name


class TransactionDB(Base):
    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_transactions_user_date", "user_id", "transaction_date"),
        Index("idx_transactions_user_account", "user_id", "account_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)  # "EXPENSE", "INCOME"
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(15, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(100))
    notes: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), nullable=False)  # "PAID", "PENDING"

    # Audit Trail
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("UserDB", back_populates="transactions")
    account = relationship("AccountDB", back_populates="transactions")
    category = relationship("CategoryDB", back_populates="transactions")

    @property
    def account_name(self) -> str:
        return self.account.account_name

    @property
    def category_name(self) -> str:
        return self.category.name


def use_immediate_transactions(target_engine: Engine) -> Engine:
    """
    Make every transaction on a SQLite engine start with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write and SQLite ignores
    SELECT ... FOR UPDATE, so without this two requests can both read
    before either writes. With it the write lock is taken when the
    transaction starts and a second writer waits for the first to commit.
    """
    @event.listens_for(target_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(target_engine, "begin")
    def _begin_immediate(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    return target_engine


engine = create_engine(DATABASE_URL, echo=SQL_ECHO)
if engine.dialect.name == "sqlite":
    use_immediate_transactions(engine)
session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=bind or engine)


# Dependency to get the database session
def get_db():
    database = session_local()
    try:
        yield database
    finally:
        database.close()
