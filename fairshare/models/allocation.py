from typing import Dict, List

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """
    A receipt line to be shared by the listed participants.

    The order of ``assigned_user_ids`` decides who absorbs the remainder
    cents when the amount does not divide evenly.
    """
    name: str
    amount_cents: int = Field(..., ge=0)
    assigned_user_ids: List[int] = []


class ItemizedAllocation(BaseModel):
    """Per-participant totals of an itemized bill, surcharges included."""
    per_participant: Dict[int, int] = {}
    subtotal_cents: int = 0
    tax_cents: int = 0
    service_cents: int = 0
    total_cents: int = 0
