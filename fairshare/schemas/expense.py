from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from fairshare.models.allocation import LineItem
from fairshare.models.expense import Expense, ExpenseItem, Split, SplitMode


class ExpenseCreate(BaseModel):
    """
    Expense split by one of the simple policies.

    ``values`` lines up with ``participant_ids``: cents for custom,
    percentages for percent, weights for shares. Not used for equal.
    """
    title: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., gt=0)
    payer_id: int
    participant_ids: List[int] = Field(..., min_length=1)
    split_mode: SplitMode = SplitMode.EQUAL
    values: Optional[List[Decimal]] = None


class ItemizedExpenseCreate(BaseModel):
    """Expense built from receipt lines; the total comes from the items."""
    title: str = Field(..., min_length=1, max_length=200)
    payer_id: int
    items: List[LineItem] = Field(..., min_length=1)
    tax_rate_percent: Decimal = Decimal(0)
    service_rate_percent: Decimal = Decimal(0)


class ExpenseDetail(BaseModel):
    expense: Expense
    splits: List[Split] = []
    items: List[ExpenseItem] = []
