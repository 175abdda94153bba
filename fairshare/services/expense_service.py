"""
Expense lifecycle: allocate, then persist the expense and its splits as one unit.

This is the only place where allocation and settlement meet the repository.
Allocation runs before anything is written, so a rejected split leaves the
ledger untouched.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from fairshare.core.result import FailureKind, Ok, Result, failure
from fairshare.models.allocation import LineItem
from fairshare.models.expense import SplitMode
from fairshare.repositories.memory_repo import InMemoryRepository
from fairshare.schemas.expense import ExpenseDetail
from fairshare.schemas.user import UserSpending
from fairshare.services.allocation_service import Weight, allocate, allocate_itemized
from fairshare.services.settlement_service import SettlementService

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, repo: InMemoryRepository):
        self.repo = repo

    async def _check_people(self, payer_id: int, participant_ids: Sequence[int]) -> Optional[Result]:
        known = {user.id for user in await self.repo.list_users()}
        if payer_id not in known:
            return failure(FailureKind.INVALID_EXPENSE, f"Unknown payer {payer_id}")
        unknown = [user_id for user_id in participant_ids if user_id not in known]
        if unknown:
            return failure(FailureKind.INVALID_EXPENSE, f"Unknown participants {unknown}")
        return None

    async def _allocate_simple(
        self,
        amount_cents: int,
        payer_id: int,
        participant_ids: Sequence[int],
        split_mode: SplitMode,
        values: Optional[Sequence[Weight]],
    ) -> Result:
        if amount_cents <= 0:
            return failure(FailureKind.INVALID_EXPENSE, "Amount must be greater than 0")
        if not participant_ids:
            return failure(FailureKind.INVALID_EXPENSE, "At least one participant is required")
        if split_mode == SplitMode.ITEMIZED:
            return failure(FailureKind.INVALID_EXPENSE, "Itemized expenses need line items")

        problem = await self._check_people(payer_id, participant_ids)
        if problem is not None:
            return problem

        return allocate(amount_cents, participant_ids, split_mode, values)

    async def _allocate_items(
        self,
        payer_id: int,
        items: Sequence[LineItem],
        tax_rate_percent: Weight,
        service_rate_percent: Weight,
    ) -> Result:
        assigned = [user_id for item in items for user_id in item.assigned_user_ids]
        problem = await self._check_people(payer_id, assigned)
        if problem is not None:
            return problem

        allocation = allocate_itemized(items, tax_rate_percent, service_rate_percent)
        if not allocation.is_ok:
            return allocation
        if allocation.value.total_cents <= 0:
            return failure(FailureKind.INVALID_EXPENSE, "Itemized expense has nothing to pay")
        return allocation

    async def get_expense_detail(self, expense_id: int) -> Optional[ExpenseDetail]:
        expense = await self.repo.get_expense(expense_id)
        if not expense:
            return None
        return ExpenseDetail(
            expense=expense,
            splits=await self.repo.list_splits(expense_id),
            items=await self.repo.list_items(expense_id)
        )

    async def list_expenses(self) -> List[ExpenseDetail]:
        details = []
        for expense in await self.repo.list_expenses():
            details.append(ExpenseDetail(
                expense=expense,
                splits=await self.repo.list_splits(expense.id),
                items=await self.repo.list_items(expense.id)
            ))
        return details

    async def create_expense(
        self,
        title: str,
        amount_cents: int,
        payer_id: int,
        participant_ids: Sequence[int],
        split_mode: SplitMode = SplitMode.EQUAL,
        values: Optional[Sequence[Weight]] = None,
    ) -> Result:
        owed = await self._allocate_simple(amount_cents, payer_id, participant_ids, split_mode, values)
        if not owed.is_ok:
            return owed

        expense = await self.repo.create_expense(
            title, amount_cents, payer_id, owed.value, split_mode=split_mode
        )
        logger.info("Created expense %s (%s cents, %s split)", expense.id, amount_cents, split_mode.value)
        return Ok(value=await self.get_expense_detail(expense.id))

    async def create_itemized_expense(
        self,
        title: str,
        payer_id: int,
        items: Sequence[LineItem],
        tax_rate_percent: Weight = Decimal(0),
        service_rate_percent: Weight = Decimal(0),
    ) -> Result:
        allocation = await self._allocate_items(payer_id, items, tax_rate_percent, service_rate_percent)
        if not allocation.is_ok:
            return allocation

        expense = await self.repo.create_expense(
            title,
            allocation.value.total_cents,
            payer_id,
            allocation.value.per_participant,
            split_mode=SplitMode.ITEMIZED,
            items=items
        )
        logger.info("Created itemized expense %s (%s cents)", expense.id, expense.amount_cents)
        return Ok(value=await self.get_expense_detail(expense.id))

    async def update_expense(
        self,
        expense_id: int,
        title: str,
        amount_cents: int,
        payer_id: int,
        participant_ids: Sequence[int],
        split_mode: SplitMode = SplitMode.EQUAL,
        values: Optional[Sequence[Weight]] = None,
    ) -> Result:
        """Recompute every split of an expense and replace them together."""
        if not await self.repo.get_expense(expense_id):
            return failure(FailureKind.UNKNOWN_EXPENSE, f"Expense {expense_id} not found")

        owed = await self._allocate_simple(amount_cents, payer_id, participant_ids, split_mode, values)
        if not owed.is_ok:
            return owed

        expense = await self.repo.replace_expense(
            expense_id, title, amount_cents, payer_id, owed.value, split_mode=split_mode
        )
        if not expense:
            return failure(FailureKind.UNKNOWN_EXPENSE, f"Expense {expense_id} not found")
        logger.info("Updated expense %s (%s cents, %s split)", expense_id, amount_cents, split_mode.value)
        return Ok(value=await self.get_expense_detail(expense_id))

    async def update_itemized_expense(
        self,
        expense_id: int,
        title: str,
        payer_id: int,
        items: Sequence[LineItem],
        tax_rate_percent: Weight = Decimal(0),
        service_rate_percent: Weight = Decimal(0),
    ) -> Result:
        if not await self.repo.get_expense(expense_id):
            return failure(FailureKind.UNKNOWN_EXPENSE, f"Expense {expense_id} not found")

        allocation = await self._allocate_items(payer_id, items, tax_rate_percent, service_rate_percent)
        if not allocation.is_ok:
            return allocation

        expense = await self.repo.replace_expense(
            expense_id,
            title,
            allocation.value.total_cents,
            payer_id,
            allocation.value.per_participant,
            split_mode=SplitMode.ITEMIZED,
            items=items
        )
        if not expense:
            return failure(FailureKind.UNKNOWN_EXPENSE, f"Expense {expense_id} not found")
        logger.info("Updated itemized expense %s (%s cents)", expense_id, expense.amount_cents)
        return Ok(value=await self.get_expense_detail(expense_id))

    async def delete_expense(self, expense_id: int) -> bool:
        deleted = await self.repo.delete_expense(expense_id)
        if deleted:
            logger.info("Deleted expense %s", expense_id)
        return deleted

    async def settlement_plan(self) -> Result:
        """Balances and payments for the whole group, from current records."""
        users = await self.repo.list_users()
        expenses = sorted(await self.repo.list_expenses(), key=lambda e: e.id)
        splits = await self.repo.list_splits()
        return SettlementService.build_plan([u.id for u in users], expenses, splits)

    async def spending_summary(self) -> List[UserSpending]:
        """Per user: sum of their shares and number of expenses they paid, biggest spender first."""
        users = await self.repo.list_users()
        expenses = await self.repo.list_expenses()
        splits = await self.repo.list_splits()

        summary = []
        for user in users:
            summary.append(UserSpending(
                id=user.id,
                name=user.name,
                avatar_color=user.avatar_color,
                total_spent_cents=sum(s.amount_owed_cents for s in splits if s.user_id == user.id),
                paid_count=sum(1 for e in expenses if e.payer_id == user.id)
            ))
        summary.sort(key=lambda entry: entry.total_spent_cents, reverse=True)
        return summary
