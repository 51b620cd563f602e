"""Authentication schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Token(BaseModel):
    """JWT token response"""

    access_token: str
    token_type: str = "bearer"


class UserCreate(BaseModel):
    """User registration schema"""

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=100)


class UserLogin(BaseModel):
    """User login schema"""

    email: str
    password: str


class UserResponse(BaseModel):
    """User response schema"""

    id: int
    email: str
    name: Optional[str] = None
    role: str
    credits: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
