"""
Allocation policies: turn a total (in cents) into per-participant amounts.

Every policy returns integers that sum exactly to the total. Rounding is
never left to floating point: weights are turned into exact fractions, each
participant gets the floor of their proportional share, and the leftover
cents are handed out by ``distribute_remainder`` starting from the first
participant. The order in which participants are listed is therefore part
of the result.
"""
import logging
import math
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Union

from fairshare.core.result import FailureKind, Ok, Result, failure
from fairshare.models.allocation import ItemizedAllocation, LineItem
from fairshare.models.expense import SplitMode

logger = logging.getLogger(__name__)

Weight = Union[int, float, Decimal, Fraction]


def _as_fraction(value: Weight) -> Fraction:
    # floats are read through their decimal text so 33.3 means 333/10
    if isinstance(value, float):
        return Fraction(str(value))
    return Fraction(value)


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def allocate_equal(total: int, count: int) -> List[int]:
    """
    Split ``total`` into ``count`` near-equal parts.

    The first ``total % count`` parts get one extra cent.
    """
    if count <= 0:
        return []
    base, remainder = divmod(total, count)
    return [base + 1 if i < remainder else base for i in range(count)]


def allocate_exact(total: int, amounts: Iterable[int]) -> Result:
    """Accept caller-supplied amounts only if they add up to ``total``."""
    amounts = list(amounts)
    amounts_sum = sum(amounts)
    if amounts_sum != total:
        return failure(
            FailureKind.AMOUNT_MISMATCH,
            f"Amounts ({amounts_sum}) do not sum to total ({total})"
        )
    return Ok(value=amounts)


def distribute_remainder(raw: Sequence[int], total: int) -> List[int]:
    """
    Correct ``raw`` so that it sums to ``total``.

    The difference is applied one cent at a time, round-robin from index 0.
    Done in closed form: every element moves by ``abs(diff) // n`` and the
    first ``abs(diff) % n`` elements move by one more.

    Nothing is clamped: when ``raw`` overshoots ``total`` by more than an
    element holds, that element comes out negative. Callers that need
    non-negative amounts check the result.
    """
    result = list(raw)
    diff = total - sum(result)
    if diff == 0:
        return result
    if not result:
        raise ValueError(f"Cannot distribute {diff} over an empty allocation")

    sign = 1 if diff > 0 else -1
    full_passes, extra = divmod(abs(diff), len(result))
    for i in range(len(result)):
        units = full_passes + (1 if i < extra else 0)
        result[i] += sign * units
    return result


def allocate_by_percent(total: int, percentages: Sequence[Weight]) -> Result:
    """
    Allocate ``total`` by percentage.

    Percentages do not have to add up to 100: any surplus or shortfall is
    absorbed by the remainder distributor, so the whole total is always
    allocated. A surplus too large to take back without someone owing a
    negative amount (200% and 0% of 1000) is rejected.
    """
    weights = [_as_fraction(p) for p in percentages]
    if any(w < 0 for w in weights):
        return failure(FailureKind.INVALID_PERCENTAGE, "Percentages must not be negative")
    if sum(weights) <= 0:
        return failure(FailureKind.INVALID_PERCENTAGE, "Percentages must sum to more than 0")

    raw = [math.floor(total * w / 100) for w in weights]
    amounts = distribute_remainder(raw, total)
    if any(a < 0 for a in amounts):
        return failure(
            FailureKind.INVALID_PERCENTAGE,
            f"Percentages leave a negative share of {total}"
        )
    return Ok(value=amounts)


def allocate_by_shares(total: int, shares: Sequence[Weight]) -> Result:
    """Allocate ``total`` proportionally to ``shares`` (normalized by their sum)."""
    weights = [_as_fraction(s) for s in shares]
    if any(w < 0 for w in weights):
        return failure(FailureKind.INVALID_SHARES, "Shares must not be negative")
    shares_sum = sum(weights)
    if shares_sum <= 0:
        return failure(FailureKind.INVALID_SHARES, "Shares must sum to more than 0")

    raw = [math.floor(total * w / shares_sum) for w in weights]
    return Ok(value=distribute_remainder(raw, total))


def allocate_itemized(
    items: Sequence[LineItem],
    tax_rate_percent: Weight = 0,
    service_rate_percent: Weight = 0,
) -> Result:
    """
    Allocate a receipt line by line, then add tax and service charge.

    1. Each item is split equally between its assignees, in the order they
       were assigned; results accumulate into per-participant subtotals
       (participants ordered by first appearance).
    2. Tax and service are percentages of the whole subtotal, rounded half
       up to the cent.
    3. Each surcharge is shared in proportion to the participants' subtotals.

    Items of 0 cents are ignored. With nothing to pay the result is empty
    with a total of 0; whether that is an acceptable expense is up to the
    caller.
    """
    tax_rate = _as_fraction(tax_rate_percent)
    service_rate = _as_fraction(service_rate_percent)
    if tax_rate < 0 or service_rate < 0:
        return failure(FailureKind.INVALID_RATE, "Tax and service rates must not be negative")

    subtotals: Dict[int, int] = {}
    for item in items:
        if item.amount_cents == 0:
            continue
        assignees = list(dict.fromkeys(item.assigned_user_ids))
        if not assignees:
            return failure(
                FailureKind.UNASSIGNED_ITEM,
                f"Item '{item.name}' has no assigned participants"
            )
        for user_id, amount in zip(assignees, allocate_equal(item.amount_cents, len(assignees))):
            subtotals[user_id] = subtotals.get(user_id, 0) + amount

    subtotal = sum(subtotals.values())
    if subtotal == 0:
        return Ok(value=ItemizedAllocation())

    tax = _round_half_up(subtotal * tax_rate / 100)
    service = _round_half_up(subtotal * service_rate / 100)

    user_ids = list(subtotals)
    weights = [subtotals[user_id] for user_id in user_ids]
    tax_parts = allocate_by_shares(tax, weights).unwrap()
    service_parts = allocate_by_shares(service, weights).unwrap()

    per_participant = {
        user_id: subtotals[user_id] + tax_part + service_part
        for user_id, tax_part, service_part in zip(user_ids, tax_parts, service_parts)
    }

    return Ok(value=ItemizedAllocation(
        per_participant=per_participant,
        subtotal_cents=subtotal,
        tax_cents=tax,
        service_cents=service,
        total_cents=subtotal + tax + service
    ))


def allocate(
    total: int,
    participant_ids: Sequence[int],
    mode: SplitMode,
    values: Optional[Sequence[Weight]] = None,
) -> Result:
    """
    Run the policy named by ``mode`` and key the result by participant.

    ``values`` lines up with ``participant_ids``: exact cents for CUSTOM,
    percentages for PERCENT, weights for SHARES; ignored for EQUAL.
    """
    participant_ids = list(participant_ids)
    if len(set(participant_ids)) != len(participant_ids):
        return failure(FailureKind.INVALID_EXPENSE, "A participant is listed more than once")

    if mode == SplitMode.EQUAL:
        amounts: Result = Ok(value=allocate_equal(total, len(participant_ids)))
    else:
        values = list(values or [])
        if mode == SplitMode.CUSTOM:
            if len(values) != len(participant_ids):
                return failure(FailureKind.AMOUNT_MISMATCH, "Expected one amount per participant")
            if any(_as_fraction(v).denominator != 1 for v in values):
                return failure(FailureKind.AMOUNT_MISMATCH, "Amounts must be whole cents")
            if any(v < 0 for v in values):
                return failure(FailureKind.AMOUNT_MISMATCH, "Amounts must not be negative")
            amounts = allocate_exact(total, [int(v) for v in values])
        elif mode == SplitMode.PERCENT:
            if len(values) != len(participant_ids):
                return failure(FailureKind.INVALID_PERCENTAGE, "Expected one percentage per participant")
            amounts = allocate_by_percent(total, values)
        elif mode == SplitMode.SHARES:
            if len(values) != len(participant_ids):
                return failure(FailureKind.INVALID_SHARES, "Expected one share per participant")
            amounts = allocate_by_shares(total, values)
        else:
            raise ValueError(f"Split mode {mode.value} needs line items, use allocate_itemized")

    if not amounts.is_ok:
        logger.debug("Allocation of %s cents (%s) rejected: %s", total, mode.value, amounts.detail)
        return amounts

    return Ok(value=dict(zip(participant_ids, amounts.value)))
