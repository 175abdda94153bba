from fastapi import status


def test_equal_allocation(client):
    response = client.post("/api/v1/allocations/equal", json={"total_cents": 1000, "count": 3})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"amounts": [334, 333, 333], "total_cents": 1000}


def test_percent_allocation(client):
    response = client.post(
        "/api/v1/allocations/percent",
        json={"total_cents": 1000, "percentages": [33, 33, 34]}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["amounts"] == [330, 330, 340]


def test_percent_allocation_invalid(client):
    response = client.post(
        "/api/v1/allocations/percent",
        json={"total_cents": 1000, "percentages": [0, 0]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "invalid_percentage"


def test_shares_allocation(client):
    response = client.post("/api/v1/allocations/shares", json={"total_cents": 1000, "shares": [1, 2]})

    assert response.json()["amounts"] == [334, 666]


def test_exact_allocation_mismatch(client):
    response = client.post(
        "/api/v1/allocations/exact",
        json={"total_cents": 1000, "amounts": [500, 400]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "amount_mismatch"


def test_itemized_allocation(client):
    response = client.post(
        "/api/v1/allocations/itemized",
        json={
            "items": [{"name": "Pizza", "amount_cents": 1000, "assigned_user_ids": [1, 2]}],
            "tax_rate_percent": 10,
            "service_rate_percent": 0
        }
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["per_participant"] == {"1": 550, "2": 550}
    assert data["total_cents"] == 1100
    assert data["tax_cents"] == 100


def test_itemized_allocation_unassigned(client):
    response = client.post(
        "/api/v1/allocations/itemized",
        json={"items": [{"name": "Pizza", "amount_cents": 1000, "assigned_user_ids": []}]}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["kind"] == "unassigned_item"


def test_negative_total_rejected_by_schema(client):
    response = client.post("/api/v1/allocations/equal", json={"total_cents": -5, "count": 2})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
