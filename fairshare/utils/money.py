"""Parsing typed or scanned money figures into integer cents."""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

_NOT_AMOUNT = re.compile(r"[^0-9.,]")


def _parse_text(text: str) -> Decimal:
    cleaned = _NOT_AMOUNT.sub("", text).replace(",", ".", 1)
    if not cleaned:
        return Decimal(0)
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal(0)


def to_cents(value: Union[str, int, float, Decimal, None]) -> int:
    """
    Convert an amount such as ``"$12,50"`` or ``12.5`` to cents.

    For text, everything but digits, ``.`` and ``,`` is dropped and the first
    comma is read as a decimal point. Anything that is not a finite number
    gives 0. Signs are ignored.
    """
    if value is None:
        return 0
    if isinstance(value, (int, float, Decimal)):
        amount = abs(Decimal(str(value)))
    else:
        amount = _parse_text(value)
    if not amount.is_finite():
        return 0
    return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
