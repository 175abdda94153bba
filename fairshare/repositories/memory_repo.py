"""
InMemoryRepository - storage for users, expenses and their splits.

All state lives on the instance: every app (and every test) builds its own
repository, and ``reset()`` starts it over. An expense and its splits are
always written together; replacing an expense's splits happens under the
repository lock so two edits of the same expense cannot interleave.
"""

import asyncio
from typing import Dict, List, Optional, Sequence

from fairshare.models.expense import Expense, ExpenseItem, Split, SplitMode
from fairshare.models.allocation import LineItem
from fairshare.models.user import User


DEMO_USERS = [
    ("Alice", "#ef4444"),
    ("Bob", "#3b82f6"),
    ("Charlie", "#10b981"),
]


class InMemoryRepository:
    """Repository for the roster and the expense ledger."""

    def __init__(self, default_avatar_color: str = "#64748b"):
        self.default_avatar_color = default_avatar_color
        self._lock = asyncio.Lock()
        self.reset()

    def reset(self) -> None:
        """Drop every record and restart id counters at 1."""
        self._users: Dict[int, User] = {}
        self._expenses: Dict[int, Expense] = {}
        self._splits: Dict[int, Split] = {}
        self._items: Dict[int, ExpenseItem] = {}
        self._next_user_id = 1
        self._next_expense_id = 1
        self._next_split_id = 1
        self._next_item_id = 1

    # ===== USERS =====

    async def seed_users_if_empty(self) -> None:
        if self._users:
            return
        for name, color in DEMO_USERS:
            await self.create_user(name, color)

    async def list_users(self) -> List[User]:
        return sorted(self._users.values(), key=lambda u: u.id)

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def create_user(self, name: str, avatar_color: Optional[str] = None) -> User:
        user = User(
            id=self._next_user_id,
            name=name,
            avatar_color=avatar_color or self.default_avatar_color
        )
        self._users[user.id] = user
        self._next_user_id += 1
        return user

    async def update_user(self, user_id: int, name: str) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update={"name": name})
        self._users[user_id] = updated
        return updated

    async def delete_user(self, user_id: int) -> bool:
        """
        Delete a user who takes no part in any expense.

        Returns False if the user paid for or owes on an expense (or does
        not exist); history is never rewritten to remove someone.
        """
        if user_id not in self._users:
            return False
        if any(e.payer_id == user_id for e in self._expenses.values()):
            return False
        if any(s.user_id == user_id for s in self._splits.values()):
            return False
        del self._users[user_id]
        return True

    # ===== EXPENSES =====

    async def list_expenses(self) -> List[Expense]:
        """Newest first."""
        return sorted(
            self._expenses.values(),
            key=lambda e: (e.created_at, e.id),
            reverse=True
        )

    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._expenses.get(expense_id)

    async def list_splits(self, expense_id: Optional[int] = None) -> List[Split]:
        splits = sorted(self._splits.values(), key=lambda s: s.id)
        if expense_id is None:
            return splits
        return [s for s in splits if s.expense_id == expense_id]

    async def list_items(self, expense_id: int) -> List[ExpenseItem]:
        return [
            item for item in sorted(self._items.values(), key=lambda i: i.id)
            if item.expense_id == expense_id
        ]

    async def create_expense(
        self,
        title: str,
        amount_cents: int,
        payer_id: int,
        owed: Dict[int, int],
        split_mode: SplitMode = SplitMode.EQUAL,
        items: Sequence[LineItem] = (),
    ) -> Expense:
        """
        Insert an expense together with one split per entry of ``owed``.

        Every record is validated before anything is stored, so a bad split
        or item raises with the repository unchanged.
        """
        async with self._lock:
            expense = Expense(
                id=self._next_expense_id,
                title=title,
                amount_cents=amount_cents,
                payer_id=payer_id,
                split_mode=split_mode
            )
            splits = self._build_splits(expense.id, owed)
            expense_items = self._build_items(expense.id, items)

            self._next_expense_id += 1
            self._expenses[expense.id] = expense
            self._store_children(splits, expense_items)
        return expense

    async def replace_expense(
        self,
        expense_id: int,
        title: str,
        amount_cents: int,
        payer_id: int,
        owed: Dict[int, int],
        split_mode: SplitMode = SplitMode.EQUAL,
        items: Sequence[LineItem] = (),
    ) -> Optional[Expense]:
        """Overwrite an expense and swap all of its splits and items."""
        async with self._lock:
            existing = self._expenses.get(expense_id)
            if not existing:
                return None
            expense = existing.model_copy(update={
                "title": title,
                "amount_cents": amount_cents,
                "payer_id": payer_id,
                "split_mode": split_mode
            })
            splits = self._build_splits(expense_id, owed)
            expense_items = self._build_items(expense_id, items)

            self._expenses[expense_id] = expense
            self._delete_children(expense_id)
            self._store_children(splits, expense_items)
        return expense

    async def delete_expense(self, expense_id: int) -> bool:
        async with self._lock:
            if expense_id not in self._expenses:
                return False
            self._delete_children(expense_id)
            del self._expenses[expense_id]
        return True

    # ===== PRIVATE HELPERS =====

    def _build_splits(self, expense_id: int, owed: Dict[int, int]) -> List[Split]:
        return [
            Split(
                id=self._next_split_id + offset,
                expense_id=expense_id,
                user_id=user_id,
                amount_owed_cents=amount
            )
            for offset, (user_id, amount) in enumerate(owed.items())
        ]

    def _build_items(self, expense_id: int, items: Sequence[LineItem]) -> List[ExpenseItem]:
        return [
            ExpenseItem(
                id=self._next_item_id + offset,
                expense_id=expense_id,
                name=line.name,
                amount_cents=line.amount_cents,
                assigned_user_ids=list(line.assigned_user_ids)
            )
            for offset, line in enumerate(items)
        ]

    def _store_children(self, splits: List[Split], items: List[ExpenseItem]) -> None:
        for split in splits:
            self._splits[split.id] = split
        for item in items:
            self._items[item.id] = item
        self._next_split_id += len(splits)
        self._next_item_id += len(items)

    def _delete_children(self, expense_id: int) -> None:
        self._splits = {k: s for k, s in self._splits.items() if s.expense_id != expense_id}
        self._items = {k: i for k, i in self._items.items() if i.expense_id != expense_id}
