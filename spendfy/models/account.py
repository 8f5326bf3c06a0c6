from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from decimal import Decimal


# ===== ACCOUNT PYDANTIC MODELS =====

class AccountRequest(BaseModel):
    """Used for both create and full update"""
    account_name: str = Field(..., min_length=1, max_length=50, description="Account name, unique per user")
    account_type: str = Field(..., min_length=1, max_length=30, description="Free-text account type, e.g. 'Checking'")
    initial_balance: Decimal = Field(..., ge=0, max_digits=15, description="Initial account balance")

    @field_validator('account_name', 'account_type')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Field must not be blank')
        return v

    @field_validator('initial_balance')
    @classmethod
    def validate_initial_balance(cls, v: Decimal) -> Decimal:
        # Round to 2 decimal places
        return round(v, 2)


class AccountResponse(BaseModel):
    id: int
    account_name: str
    account_type: str
    initial_balance: Decimal
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
