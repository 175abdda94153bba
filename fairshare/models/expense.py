"""
Expense models - what was paid and who owes what.

Design principles:
- One expense row plus N split rows, written and replaced as a unit
- All amounts in integer cents
- For a given expense, split amounts sum exactly to amount_cents
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from fairshare.models.base import RecordModel


class SplitMode(str, Enum):
    EQUAL = "equal"
    CUSTOM = "custom"      # exact amounts per participant
    PERCENT = "percent"
    SHARES = "shares"
    ITEMIZED = "itemized"


class Expense(RecordModel):
    title: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., gt=0)
    payer_id: int
    split_mode: SplitMode = SplitMode.EQUAL


class Split(BaseModel):
    """One participant's share of one expense."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: Optional[int] = None
    expense_id: int
    user_id: int
    amount_owed_cents: int = Field(..., ge=0)


class ExpenseItem(BaseModel):
    """Persisted receipt line of an itemized expense, with its assignees."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: Optional[int] = None
    expense_id: int
    name: str
    amount_cents: int = Field(..., ge=0)
    assigned_user_ids: List[int] = []
