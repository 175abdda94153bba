"""Turning a person-confirmed receipt draft into allocatable line items."""
from decimal import Decimal
from typing import List, Optional, Sequence

from fairshare.core.result import FailureKind, Ok, Result, failure
from fairshare.models.allocation import LineItem
from fairshare.schemas.receipt import ReceiptDraft, SuggestedRates
from fairshare.utils.money import to_cents

PERCENT_PRECISION = Decimal("0.01")


def _rate(explicit: Optional[Decimal], amount: Decimal, subtotal: Decimal) -> Decimal:
    if explicit is not None:
        return max(explicit, Decimal(0)).quantize(PERCENT_PRECISION)
    if subtotal <= 0 or amount <= 0:
        return Decimal(0).quantize(PERCENT_PRECISION)
    return (amount / subtotal * 100).quantize(PERCENT_PRECISION)


def suggest_rates(draft: ReceiptDraft) -> SuggestedRates:
    """
    Tax and service rates to prefill for confirmation.

    Printed percentages win; otherwise the rate is derived from the printed
    tax/tip amount relative to the sum of the items. The tip becomes the
    service charge.
    """
    subtotal = sum((abs(item.amount) for item in draft.items), Decimal(0))
    return SuggestedRates(
        tax_rate_percent=_rate(draft.tax_percent, draft.tax, subtotal),
        service_rate_percent=_rate(draft.tip_percent, draft.tip, subtotal)
    )


def draft_to_line_items(draft: ReceiptDraft, assignments: Sequence[Sequence[int]]) -> Result:
    """
    Pair each draft item with the participants a person assigned to it.

    ``assignments[i]`` belongs to ``draft.items[i]``; every item needs an
    entry, even if it is an empty list for a line that costs nothing.
    """
    if len(assignments) != len(draft.items):
        return failure(
            FailureKind.INVALID_EXPENSE,
            f"Expected assignments for {len(draft.items)} items, got {len(assignments)}"
        )

    items: List[LineItem] = []
    for index, (draft_item, user_ids) in enumerate(zip(draft.items, assignments)):
        amount_cents = to_cents(draft_item.amount)
        if amount_cents > 0 and not user_ids:
            return failure(
                FailureKind.UNASSIGNED_ITEM,
                f"Item '{draft_item.description or index + 1}' has no assigned participants"
            )
        items.append(LineItem(
            name=draft_item.description or f"Item {index + 1}",
            amount_cents=amount_cents,
            assigned_user_ids=list(user_ids)
        ))
    return Ok(value=items)
