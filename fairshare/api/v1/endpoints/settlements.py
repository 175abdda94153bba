from fastapi import APIRouter, Depends

from fairshare.api.v1.errors import raise_for_failure
from fairshare.db.session import get_expense_service
from fairshare.models.settlement import SettlementPlan
from fairshare.services.expense_service import ExpenseService

router = APIRouter()


@router.get("/", response_model=SettlementPlan)
async def get_settlement_plan(service: ExpenseService = Depends(get_expense_service)):
    """Current balances and the payments that settle them"""
    result = await service.settlement_plan()
    raise_for_failure(result)
    return result.value
