"""
Settlement - who pays whom so that every balance goes back to zero.

Algorithm:
1. Collect participants in first-seen order: roster, then payers, then
   split participants
2. Net balance per participant = paid - owed
3. Refuse a ledger whose balances do not sum to zero
4. Greedy: match the largest debtor with the largest creditor, transfer the
   smaller of the two amounts, repeat until one side is exhausted

Ties on amount go to whoever was seen first, so the output order is fully
determined by the input order.
"""
import heapq
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from fairshare.core.result import FailureKind, Ok, Result, failure
from fairshare.models.expense import Expense, Split
from fairshare.models.settlement import ParticipantBalance, PaymentInstruction, SettlementPlan

logger = logging.getLogger(__name__)


class SettlementService:
    @staticmethod
    def compute_balances(
        participants: Iterable[int],
        expenses: Sequence[Expense],
        splits: Sequence[Split],
    ) -> Dict[int, int]:
        """
        Net balance per participant, in first-seen order.

        Positive = is owed money, negative = owes money.
        """
        balances: Dict[int, int] = {}
        for user_id in participants:
            balances.setdefault(user_id, 0)
        for expense in expenses:
            balances.setdefault(expense.payer_id, 0)
        for split in splits:
            balances.setdefault(split.user_id, 0)

        for expense in expenses:
            balances[expense.payer_id] += expense.amount_cents
        for split in splits:
            balances[split.user_id] -= split.amount_owed_cents

        return balances

    @staticmethod
    def minimize_transfers(balances: Dict[int, int]) -> List[PaymentInstruction]:
        """
        Reduce zero-sum balances to payment instructions.

        Heap entries are (-amount, first_seen_index, user_id) so the largest
        amount wins and equal amounts go to the participant seen first.
        """
        debtors: List[Tuple[int, int, int]] = []
        creditors: List[Tuple[int, int, int]] = []
        for index, (user_id, balance) in enumerate(balances.items()):
            if balance < 0:
                debtors.append((balance, index, user_id))
            elif balance > 0:
                creditors.append((-balance, index, user_id))
        heapq.heapify(debtors)
        heapq.heapify(creditors)

        payments: List[PaymentInstruction] = []
        while debtors and creditors:
            neg_debt, debtor_index, debtor_id = heapq.heappop(debtors)
            neg_credit, creditor_index, creditor_id = heapq.heappop(creditors)
            debt, credit = -neg_debt, -neg_credit

            amount = min(debt, credit)
            payments.append(PaymentInstruction(
                from_user_id=debtor_id,
                to_user_id=creditor_id,
                amount_cents=amount
            ))
            logger.debug("Transfer %s -> %s: %s cents", debtor_id, creditor_id, amount)

            if debt > amount:
                heapq.heappush(debtors, (amount - debt, debtor_index, debtor_id))
            if credit > amount:
                heapq.heappush(creditors, (amount - credit, creditor_index, creditor_id))

        return payments

    @staticmethod
    def settle(
        participants: Iterable[int],
        expenses: Sequence[Expense],
        splits: Sequence[Split],
    ) -> Result:
        """
        Payment instructions that zero out every participant's balance.

        Returns an IMBALANCED_LEDGER failure if the recorded splits do not
        add up to the recorded expenses; such data is never repaired here.
        """
        balances = SettlementService.compute_balances(participants, expenses, splits)

        net = sum(balances.values())
        if net != 0:
            logger.warning("Ledger does not balance: balances sum to %s cents", net)
            return failure(
                FailureKind.IMBALANCED_LEDGER,
                f"Net balance must sum to 0, got {net}"
            )

        logger.debug("Balances: %s", balances)
        return Ok(value=SettlementService.minimize_transfers(balances))

    @staticmethod
    def build_plan(
        participants: Iterable[int],
        expenses: Sequence[Expense],
        splits: Sequence[Split],
    ) -> Result:
        """Balances and payments together, for a settle-up view."""
        participants = list(participants)
        payments = SettlementService.settle(participants, expenses, splits)
        if not payments.is_ok:
            return payments

        balances = SettlementService.compute_balances(participants, expenses, splits)
        return Ok(value=SettlementPlan(
            balances=[
                ParticipantBalance(user_id=user_id, net_cents=net_cents)
                for user_id, net_cents in balances.items()
            ],
            payments=payments.value
        ))


def settle(
    participants: Iterable[int],
    expenses: Sequence[Expense],
    splits: Sequence[Split],
) -> Result:
    return SettlementService.settle(participants, expenses, splits)
