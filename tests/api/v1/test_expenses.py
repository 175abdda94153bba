from fastapi import status


def _create(client, **overrides):
    payload = {
        "title": "Dinner",
        "amount_cents": 1000,
        "payer_id": 1,
        "participant_ids": [1, 2, 3],
        "split_mode": "equal"
    }
    payload.update(overrides)
    return client.post("/api/v1/expenses/", json=payload)


def _owed(detail):
    return {s["user_id"]: s["amount_owed_cents"] for s in detail["splits"]}


def test_create_expense(client):
    response = _create(client)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["expense"]["title"] == "Dinner"
    assert _owed(data) == {1: 334, 2: 333, 3: 333}


def test_create_expense_by_shares(client):
    response = _create(client, split_mode="shares", participant_ids=[1, 2], values=[1, 3])

    assert response.status_code == status.HTTP_201_CREATED
    assert _owed(response.json()) == {1: 250, 2: 750}


def test_create_expense_custom_mismatch(client):
    response = _create(client, split_mode="custom", participant_ids=[1, 2], values=[100, 200])

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "amount_mismatch"
    assert client.get("/api/v1/expenses/").json() == []


def test_create_expense_zero_amount_rejected(client):
    response = _create(client, amount_cents=0)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_itemized_expense(client):
    response = client.post(
        "/api/v1/expenses/itemized",
        json={
            "title": "Pizzeria",
            "payer_id": 2,
            "items": [
                {"name": "Margherita", "amount_cents": 1000, "assigned_user_ids": [1, 2]},
                {"name": "Tiramisu", "amount_cents": 600, "assigned_user_ids": [3]}
            ],
            "tax_rate_percent": "10",
            "service_rate_percent": "0"
        }
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["expense"]["amount_cents"] == 1760
    assert data["expense"]["split_mode"] == "itemized"
    assert _owed(data) == {1: 550, 2: 550, 3: 660}
    assert len(data["items"]) == 2


def test_get_update_delete_expense(client):
    expense_id = _create(client).json()["expense"]["id"]

    response = client.get(f"/api/v1/expenses/{expense_id}")
    assert response.status_code == status.HTTP_200_OK

    response = client.put(
        f"/api/v1/expenses/{expense_id}",
        json={
            "title": "Dinner (fixed)",
            "amount_cents": 1200,
            "payer_id": 2,
            "participant_ids": [2, 3],
            "split_mode": "percent",
            "values": [50, 50]
        }
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["expense"]["title"] == "Dinner (fixed)"
    assert _owed(response.json()) == {2: 600, 3: 600}

    response = client.delete(f"/api/v1/expenses/{expense_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"/api/v1/expenses/{expense_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_unknown_expense(client):
    response = client.put(
        "/api/v1/expenses/99",
        json={"title": "Ghost", "amount_cents": 100, "payer_id": 1, "participant_ids": [1]}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"]["kind"] == "unknown_expense"


def test_delete_unknown_expense(client):
    response = client.delete("/api/v1/expenses/99")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_expense_percent_surplus_rejected(client):
    response = _create(client, split_mode="percent", participant_ids=[1, 2], values=[200, 0])

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "invalid_percentage"
    assert client.get("/api/v1/expenses/").json() == []
    assert client.get("/api/v1/settlements/").status_code == status.HTTP_200_OK


def test_create_expense_negative_custom_amount_rejected(client):
    response = _create(client, split_mode="custom", participant_ids=[1, 2], values=[-500, 1500])

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "amount_mismatch"
    assert client.get("/api/v1/expenses/").json() == []
