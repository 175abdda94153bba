from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """User creation schema."""
    name: str = Field(..., min_length=1, max_length=100)
    avatar_color: Optional[str] = None


class UserUpdate(BaseModel):
    """User update schema."""
    name: str = Field(..., min_length=1, max_length=100)


class UserSpending(BaseModel):
    """How much a user's shares add up to and how often they paid."""
    id: int
    name: str
    avatar_color: Optional[str] = None
    total_spent_cents: int = 0
    paid_count: int = 0
