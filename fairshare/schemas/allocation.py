from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field

from fairshare.models.allocation import LineItem


class EqualAllocationRequest(BaseModel):
    total_cents: int = Field(..., ge=0)
    count: int = Field(..., ge=0)


class ExactAllocationRequest(BaseModel):
    total_cents: int = Field(..., ge=0)
    amounts: List[int]


class PercentAllocationRequest(BaseModel):
    total_cents: int = Field(..., ge=0)
    percentages: List[Decimal]


class SharesAllocationRequest(BaseModel):
    total_cents: int = Field(..., ge=0)
    shares: List[int]


class ItemizedAllocationRequest(BaseModel):
    items: List[LineItem]
    tax_rate_percent: Decimal = Decimal(0)
    service_rate_percent: Decimal = Decimal(0)


class AllocationResponse(BaseModel):
    amounts: List[int]
    total_cents: int


class ItemizedAllocationResponse(BaseModel):
    per_participant: Dict[int, int]
    subtotal_cents: int
    tax_cents: int
    service_cents: int
    total_cents: int
