from fastapi import APIRouter

from fairshare.api.v1.errors import raise_for_failure
from fairshare.schemas.allocation import (
    AllocationResponse,
    EqualAllocationRequest,
    ExactAllocationRequest,
    ItemizedAllocationRequest,
    ItemizedAllocationResponse,
    PercentAllocationRequest,
    SharesAllocationRequest,
)
from fairshare.services.allocation_service import (
    allocate_by_percent,
    allocate_by_shares,
    allocate_equal,
    allocate_exact,
    allocate_itemized,
)

router = APIRouter()


@router.post("/equal", response_model=AllocationResponse)
async def split_equal(payload: EqualAllocationRequest):
    """Split a total evenly; earlier participants absorb the remainder cents"""
    amounts = allocate_equal(payload.total_cents, payload.count)
    return AllocationResponse(amounts=amounts, total_cents=sum(amounts))


@router.post("/exact", response_model=AllocationResponse)
async def split_exact(payload: ExactAllocationRequest):
    """Check that exact amounts add up to the total"""
    result = allocate_exact(payload.total_cents, payload.amounts)
    raise_for_failure(result)
    return AllocationResponse(amounts=result.value, total_cents=payload.total_cents)


@router.post("/percent", response_model=AllocationResponse)
async def split_by_percent(payload: PercentAllocationRequest):
    result = allocate_by_percent(payload.total_cents, payload.percentages)
    raise_for_failure(result)
    return AllocationResponse(amounts=result.value, total_cents=payload.total_cents)


@router.post("/shares", response_model=AllocationResponse)
async def split_by_shares(payload: SharesAllocationRequest):
    result = allocate_by_shares(payload.total_cents, payload.shares)
    raise_for_failure(result)
    return AllocationResponse(amounts=result.value, total_cents=payload.total_cents)


@router.post("/itemized", response_model=ItemizedAllocationResponse)
async def split_itemized(payload: ItemizedAllocationRequest):
    """Split receipt lines between their assignees, then share tax and service"""
    result = allocate_itemized(payload.items, payload.tax_rate_percent, payload.service_rate_percent)
    raise_for_failure(result)
    return result.value.model_dump()
