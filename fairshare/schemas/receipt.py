"""
Receipt drafts as produced by the OCR collaborator.

Everything in a draft is a best guess read off a photo. Nothing here is
trusted for the engine's invariants: a person confirms items and assigns
participants before a draft becomes line items.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from fairshare.models.allocation import LineItem


class DraftItem(BaseModel):
    description: str = ""
    amount: Decimal = Decimal(0)  # currency units as printed, not cents


class ReceiptDraft(BaseModel):
    items: List[DraftItem] = []
    total: Decimal = Decimal(0)
    tax: Decimal = Decimal(0)
    tip: Decimal = Decimal(0)
    tax_percent: Optional[Decimal] = Field(default=None, alias="taxPercent")
    tip_percent: Optional[Decimal] = Field(default=None, alias="tipPercent")
    merchant: str = "Unknown Merchant"

    model_config = ConfigDict(populate_by_name=True)


class SuggestedRates(BaseModel):
    tax_rate_percent: Decimal
    service_rate_percent: Decimal


class ConfirmedReceipt(BaseModel):
    """A draft plus, for every draft item, the participants sharing it."""
    draft: ReceiptDraft
    assignments: List[List[int]]


class ReceiptLineItems(BaseModel):
    merchant: str
    items: List[LineItem]
    tax_rate_percent: Decimal
    service_rate_percent: Decimal
