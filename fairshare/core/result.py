"""
Typed results for allocation and settlement.

Every validation failure in the engine is returned as an ``AllocationFailure``
value instead of being raised, so callers branch on the outcome explicitly:

    result = allocate_by_percent(1000, [50, 50])
    if isinstance(result, AllocationFailure):
        ...
    amounts = result.value
"""
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class FailureKind(str, Enum):
    AMOUNT_MISMATCH = "amount_mismatch"
    INVALID_PERCENTAGE = "invalid_percentage"
    INVALID_SHARES = "invalid_shares"
    INVALID_RATE = "invalid_rate"
    UNASSIGNED_ITEM = "unassigned_item"
    IMBALANCED_LEDGER = "imbalanced_ledger"
    INVALID_EXPENSE = "invalid_expense"
    UNKNOWN_EXPENSE = "unknown_expense"


class AllocationError(Exception):
    """Raised by ``unwrap()`` for callers that prefer exceptions."""

    def __init__(self, kind: FailureKind, detail: str):
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail


class Ok(BaseModel, Generic[T]):
    """Successful outcome carrying the computed value."""
    value: T

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


class AllocationFailure(BaseModel):
    """Named validation failure; nothing was allocated."""
    kind: FailureKind
    detail: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise AllocationError(self.kind, self.detail)


Result = Union[Ok, AllocationFailure]


def failure(kind: FailureKind, detail: str) -> AllocationFailure:
    return AllocationFailure(kind=kind, detail=detail)
