from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from enum import Enum
import re


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


# ===== USER PYDANTIC MODELS =====

class UserStatusEnum(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., max_length=100, description="User's email address")
    password: str = Field(..., min_length=6, max_length=72, description="Password (6-72 characters)")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name must not be blank')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        # Emails are compared exactly as stored, so only surrounding whitespace is removed
        v = v.strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError('Invalid email format')
        return v


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return v.strip()


class AuthResponse(BaseModel):
    """Issued token plus the identity it was issued for"""
    token: str
    token_type: str = "Bearer"
    id: int
    name: str
    email: str


class UserResponse(BaseModel):
    """User data returned to client - no sensitive info"""
    id: int
    name: str
    email: str
    status: UserStatusEnum
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
