from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

# ===== CATEGORY PYDANTIC MODELS =====

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, description="Category name, unique per user")
    color: Optional[str] = Field(None, max_length=20, description="Optional color tag, e.g. 'green' or '#00FF00'")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name must not be blank')
        return v

class CategoryRequest(CategoryBase):
    pass

class CategoryResponse(CategoryBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
