from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


# ===== TRANSACTION PYDANTIC MODELS =====

class TransactionRequest(BaseModel):
    """Used for both create and full update"""
    transaction_type: str = Field(..., min_length=1, max_length=20, description="Free-text kind, e.g. 'EXPENSE' or 'INCOME'")
    transaction_date: date = Field(..., description="Date of the transaction")
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=15, description="Transaction amount (always positive)")
    description: Optional[str] = Field(None, max_length=100, description="Short description")
    notes: Optional[str] = Field(None, max_length=255, description="Free-form notes")
    status: str = Field(..., min_length=1, max_length=20, description="Free-text status, e.g. 'PAID'")
    account_id: int = Field(..., description="The ID of the account")
    category_id: int = Field(..., description="The ID of the category")

    @field_validator('transaction_type', 'status')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Field must not be blank')
        return v

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)


class TransactionResponse(BaseModel):
    id: int
    transaction_type: str
    transaction_date: date
    amount: Decimal
    description: Optional[str] = None
    notes: Optional[str] = None
    status: str
    user_id: int
    account_id: int
    account_name: str
    category_id: int
    category_name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
