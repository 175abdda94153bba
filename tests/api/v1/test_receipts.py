from fastapi import status

DRAFT = {
    "items": [
        {"description": "Burger", "amount": "10.00"},
        {"description": "Fries", "amount": "5.00"}
    ],
    "total": "16.50",
    "tax": "1.50",
    "tip": "0",
    "merchant": "Diner"
}


def test_suggest_rates(client):
    response = client.post("/api/v1/receipts/suggest-rates", json=DRAFT)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["tax_rate_percent"] == "10.00"
    assert data["service_rate_percent"] == "0.00"


def test_line_items_then_itemized_expense(client):
    response = client.post(
        "/api/v1/receipts/line-items",
        json={"draft": DRAFT, "assignments": [[1, 2], [3]]}
    )
    assert response.status_code == status.HTTP_200_OK
    confirmed = response.json()
    assert confirmed["merchant"] == "Diner"
    assert [i["amount_cents"] for i in confirmed["items"]] == [1000, 500]

    response = client.post(
        "/api/v1/expenses/itemized",
        json={
            "title": confirmed["merchant"],
            "payer_id": 1,
            "items": confirmed["items"],
            "tax_rate_percent": confirmed["tax_rate_percent"],
            "service_rate_percent": confirmed["service_rate_percent"]
        }
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["expense"]["amount_cents"] == 1650


def test_line_items_unassigned(client):
    response = client.post(
        "/api/v1/receipts/line-items",
        json={"draft": DRAFT, "assignments": [[1, 2], []]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "unassigned_item"
