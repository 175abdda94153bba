from typing import List
from fastapi import APIRouter, HTTPException, Depends, status

from fairshare.api.v1.errors import raise_for_failure
from fairshare.db.session import get_expense_service
from fairshare.schemas.expense import ExpenseCreate, ExpenseDetail, ItemizedExpenseCreate
from fairshare.services.expense_service import ExpenseService

router = APIRouter()


@router.get("/", response_model=List[ExpenseDetail])
async def list_expenses(service: ExpenseService = Depends(get_expense_service)):
    """All expenses, newest first, with their splits"""
    return await service.list_expenses()


@router.post("/", response_model=ExpenseDetail, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service)
):
    result = await service.create_expense(
        expense_in.title,
        expense_in.amount_cents,
        expense_in.payer_id,
        expense_in.participant_ids,
        expense_in.split_mode,
        expense_in.values
    )
    raise_for_failure(result)
    return result.value


@router.post("/itemized", response_model=ExpenseDetail, status_code=status.HTTP_201_CREATED)
async def create_itemized_expense(
    expense_in: ItemizedExpenseCreate,
    service: ExpenseService = Depends(get_expense_service)
):
    result = await service.create_itemized_expense(
        expense_in.title,
        expense_in.payer_id,
        expense_in.items,
        expense_in.tax_rate_percent,
        expense_in.service_rate_percent
    )
    raise_for_failure(result)
    return result.value


@router.get("/{expense_id}", response_model=ExpenseDetail)
async def get_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    detail = await service.get_expense_detail(expense_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Expense not found")
    return detail


@router.put("/{expense_id}", response_model=ExpenseDetail)
async def update_expense(
    expense_id: int,
    expense_in: ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service)
):
    """Replace an expense and recompute all of its splits"""
    result = await service.update_expense(
        expense_id,
        expense_in.title,
        expense_in.amount_cents,
        expense_in.payer_id,
        expense_in.participant_ids,
        expense_in.split_mode,
        expense_in.values
    )
    raise_for_failure(result)
    return result.value


@router.put("/{expense_id}/itemized", response_model=ExpenseDetail)
async def update_itemized_expense(
    expense_id: int,
    expense_in: ItemizedExpenseCreate,
    service: ExpenseService = Depends(get_expense_service)
):
    result = await service.update_itemized_expense(
        expense_id,
        expense_in.title,
        expense_in.payer_id,
        expense_in.items,
        expense_in.tax_rate_percent,
        expense_in.service_rate_percent
    )
    raise_for_failure(result)
    return result.value


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    if not await service.delete_expense(expense_id):
        raise HTTPException(status_code=404, detail="Expense not found")
