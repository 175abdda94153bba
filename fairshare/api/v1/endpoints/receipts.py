from fastapi import APIRouter

from fairshare.api.v1.errors import raise_for_failure
from fairshare.schemas.receipt import ConfirmedReceipt, ReceiptDraft, ReceiptLineItems, SuggestedRates
from fairshare.utils.receipt_draft import draft_to_line_items, suggest_rates

router = APIRouter()


@router.post("/suggest-rates", response_model=SuggestedRates)
async def get_suggested_rates(draft: ReceiptDraft):
    """Tax and service rates read off a scanned receipt, for the user to confirm"""
    return suggest_rates(draft)


@router.post("/line-items", response_model=ReceiptLineItems)
async def build_line_items(confirmed: ConfirmedReceipt):
    """Turn a confirmed draft and its assignments into line items for an itemized expense"""
    result = draft_to_line_items(confirmed.draft, confirmed.assignments)
    raise_for_failure(result)
    rates = suggest_rates(confirmed.draft)
    return ReceiptLineItems(
        merchant=confirmed.draft.merchant,
        items=result.value,
        tax_rate_percent=rates.tax_rate_percent,
        service_rate_percent=rates.service_rate_percent
    )
