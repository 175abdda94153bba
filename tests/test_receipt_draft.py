"""
Tests for receipt draft intake.

Covers:
- Parsing typed/scanned amounts into cents
- Rate suggestions from printed percentages or amounts
- Turning confirmed drafts into line items
"""

from decimal import Decimal

import pytest

from fairshare.core.result import FailureKind
from fairshare.schemas.receipt import DraftItem, ReceiptDraft
from fairshare.utils.money import to_cents
from fairshare.utils.receipt_draft import draft_to_line_items, suggest_rates


@pytest.mark.parametrize("value,expected", [
    ("12.50", 1250),
    ("$12,50", 1250),
    ("EUR 7", 700),
    ("0.005", 1),
    ("", 0),
    ("abc", 0),
    ("1.2.3", 0),
    (None, 0),
    (Decimal("3.99"), 399),
    (4, 400),
    (2.675, 268),
])
def test_to_cents(value, expected):
    assert to_cents(value) == expected


def _draft(**overrides):
    data = {
        "items": [
            DraftItem(description="Burger", amount=Decimal("10.00")),
            DraftItem(description="Fries", amount=Decimal("5.00")),
        ],
        "total": Decimal("17.25"),
        "tax": Decimal("1.50"),
        "tip": Decimal("0.75"),
        "merchant": "Diner",
    }
    data.update(overrides)
    return ReceiptDraft(**data)


def test_suggest_rates_from_amounts():
    rates = suggest_rates(_draft())

    assert rates.tax_rate_percent == Decimal("10.00")
    assert rates.service_rate_percent == Decimal("5.00")


def test_suggest_rates_prefers_printed_percent():
    draft = ReceiptDraft.model_validate({
        "items": [{"description": "Soup", "amount": "8.00"}],
        "tax": "1.00",
        "taxPercent": "8.5",
        "tipPercent": "15",
    })

    rates = suggest_rates(draft)

    assert rates.tax_rate_percent == Decimal("8.50")
    assert rates.service_rate_percent == Decimal("15.00")


def test_suggest_rates_without_items():
    rates = suggest_rates(ReceiptDraft(tax=Decimal("2.00")))

    assert rates.tax_rate_percent == Decimal("0")
    assert rates.service_rate_percent == Decimal("0")


def test_draft_to_line_items():
    result = draft_to_line_items(_draft(), [[1, 2], [2]])

    items = result.value
    assert [(i.name, i.amount_cents, i.assigned_user_ids) for i in items] == [
        ("Burger", 1000, [1, 2]),
        ("Fries", 500, [2]),
    ]


def test_draft_to_line_items_names_blank_items():
    draft = _draft(items=[DraftItem(amount=Decimal("2.00"))])

    items = draft_to_line_items(draft, [[3]]).value

    assert items[0].name == "Item 1"


def test_draft_to_line_items_requires_every_assignment():
    result = draft_to_line_items(_draft(), [[1, 2]])

    assert result.kind == FailureKind.INVALID_EXPENSE


def test_draft_to_line_items_unassigned_item():
    result = draft_to_line_items(_draft(), [[1], []])

    assert result.kind == FailureKind.UNASSIGNED_ITEM
    assert "Fries" in result.detail
