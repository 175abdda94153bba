from typing import List

from pydantic import BaseModel, Field


class PaymentInstruction(BaseModel):
    """Directed transfer: from_user_id pays to_user_id amount_cents."""
    from_user_id: int
    to_user_id: int
    amount_cents: int = Field(..., gt=0)


class ParticipantBalance(BaseModel):
    """Net position: positive is owed money, negative owes money."""
    user_id: int
    net_cents: int


class SettlementPlan(BaseModel):
    balances: List[ParticipantBalance] = []
    payments: List[PaymentInstruction] = []
