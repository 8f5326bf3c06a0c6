from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, date
from decimal import Decimal

# ===== BUDGET PYDANTIC MODELS =====

class BudgetRequest(BaseModel):
    """
    Used for both create and full update.

    Period ordering (end_date >= start_date) is enforced by the budget
    service, which raises InvalidRangeError.
    """
    limit_amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=15, description="Spending limit for the period")
    start_date: date = Field(..., description="First day of the budget period (inclusive)")
    end_date: date = Field(..., description="Last day of the budget period (inclusive)")
    category_id: int = Field(..., description="The ID of the category this budget caps")

    @field_validator('limit_amount')
    @classmethod
    def validate_limit_amount(cls, v: Decimal) -> Decimal:
        return round(v, 2)

class BudgetResponse(BaseModel):
    id: int
    limit_amount: Decimal
    start_date: date
    end_date: date
    user_id: int
    category_id: int
    category_name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
