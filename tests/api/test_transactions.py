"""Tests for expense transaction endpoints."""

from collections.abc import Awaitable, Callable
from datetime import date

import pytest
from httpx import AsyncClient

RegisterUser = Callable[..., Awaitable[dict[str, str]]]


@pytest.mark.asyncio
async def test_create_with_explicit_category(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()

    response = await api_client.post(
        "/api/transactions",
        json={
            "amount": "42.10",
            "merchant": " Corner Deli ",
            "category": "needs",
            "subcategory": "groceries",
            "transaction_date": "2025-03-02",
        },
        headers=headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["amount"] == 42.10
    assert created["merchant"] == "Corner Deli"
    assert created["category"] == "needs"
    assert created["source"] == "manual"
    assert created["transaction_date"] == "2025-03-02"


@pytest.mark.asyncio
async def test_category_derived_from_merchant(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()

    response = await api_client.post(
        "/api/transactions",
        json={"amount": "5.75", "merchant": "Starbucks #1182"},
        headers=headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert (created["category"], created["subcategory"]) == ("wants", "dining")
    assert created["transaction_date"] == date.today().isoformat()


@pytest.mark.asyncio
async def test_explicit_category_is_learned(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    """Setting a category once makes later transactions from that merchant follow it."""
    headers = await register_user()

    await api_client.post(
        "/api/transactions",
        json={"amount": "20", "merchant": "Corner Deli", "category": "needs", "subcategory": "lunch"},
        headers=headers,
    )
    response = await api_client.post(
        "/api/transactions",
        json={"amount": "9", "merchant": "CORNER DELI downtown"},
        headers=headers,
    )
    assert (response.json()["category"], response.json()["subcategory"]) == ("needs", "lunch")


@pytest.mark.asyncio
async def test_learn_category_endpoint(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()

    learn_response = await api_client.post(
        "/api/transactions/learn-category",
        json={"merchant": "Netflix", "category": "needs", "subcategory": "family"},
        headers=headers,
    )
    assert learn_response.status_code == 204

    response = await api_client.post(
        "/api/transactions", json={"amount": "15.49", "merchant": "NETFLIX.COM"}, headers=headers
    )
    assert response.json()["category"] == "needs"


@pytest.mark.asyncio
async def test_list_with_pagination_and_date_filter(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()
    for day in ("2025-01-05", "2025-01-20", "2025-02-03"):
        await api_client.post(
            "/api/transactions",
            json={"amount": "10", "category": "wants", "transaction_date": day},
            headers=headers,
        )

    page = await api_client.get("/api/transactions", params={"limit": 2}, headers=headers)
    assert page.status_code == 200
    payload = page.json()
    assert payload["total"] == 3
    assert payload["limit"] == 2
    assert [item["transaction_date"] for item in payload["items"]] == ["2025-02-03", "2025-01-20"]

    january = await api_client.get(
        "/api/transactions",
        params={"start_date": "2025-01-01", "end_date": "2025-01-31"},
        headers=headers,
    )
    assert january.json()["total"] == 2

    bad_range = await api_client.get(
        "/api/transactions",
        params={"start_date": "2025-02-01", "end_date": "2025-01-01"},
        headers=headers,
    )
    assert bad_range.status_code == 400


@pytest.mark.asyncio
async def test_summary_groups_by_category(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()
    for amount, category, subcategory in (
        ("100.00", "needs", "groceries"),
        ("50.00", "needs", "gas"),
        ("25.50", "wants", "dining"),
    ):
        await api_client.post(
            "/api/transactions",
            json={
                "amount": amount,
                "category": category,
                "subcategory": subcategory,
                "transaction_date": "2025-05-10",
            },
            headers=headers,
        )

    response = await api_client.get(
        "/api/transactions/stats/summary",
        params={"start_date": "2025-05-01", "end_date": "2025-05-31"},
        headers=headers,
    )
    assert response.status_code == 200
    summary = response.json()
    assert summary["total"] == 175.5
    assert summary["count"] == 3
    by_category = {row["category"]: row for row in summary["by_category"]}
    assert by_category["needs"]["total"] == 150.0
    assert by_category["needs"]["count"] == 2
    assert by_category["wants"]["total"] == 25.5
    assert len(summary["by_subcategory"]) == 3


@pytest.mark.asyncio
async def test_summary_defaults_to_current_month(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    headers = await register_user()
    response = await api_client.get("/api/transactions/stats/summary", headers=headers)
    assert response.status_code == 200
    assert response.json()["start_date"] == date.today().replace(day=1).isoformat()
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_update_and_delete(api_client: AsyncClient, register_user: RegisterUser) -> None:
    headers = await register_user()
    created = (
        await api_client.post(
            "/api/transactions",
            json={"amount": "10", "category": "wants", "description": "snacks"},
            headers=headers,
        )
    ).json()
    url = f"/api/transactions/{created['id']}"

    patch_response = await api_client.patch(
        url, json={"amount": "12.25", "description": None}, headers=headers
    )
    assert patch_response.status_code == 200
    patched = patch_response.json()
    assert patched["amount"] == 12.25
    assert patched["description"] is None
    assert patched["category"] == "wants"

    assert (await api_client.delete(url, headers=headers)).status_code == 204
    assert (await api_client.get(url, headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_other_users_transaction_is_not_found(
    api_client: AsyncClient, register_user: RegisterUser
) -> None:
    owner = await register_user()
    intruder = await register_user("intruder@example.com", "Intruder")
    created = (
        await api_client.post(
            "/api/transactions", json={"amount": "10", "category": "wants"}, headers=owner
        )
    ).json()
    url = f"/api/transactions/{created['id']}"

    assert (await api_client.get(url, headers=intruder)).status_code == 404
    assert (await api_client.patch(url, json={"amount": "1"}, headers=intruder)).status_code == 404
    assert (await api_client.delete(url, headers=intruder)).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "0"},
        {"amount": "-3"},
        {"amount": "1.234"},
        {"amount": "10", "category": "luxuries"},
    ],
)
async def test_invalid_transaction_rejected(
    api_client: AsyncClient, register_user: RegisterUser, payload: dict
) -> None:
    headers = await register_user()
    response = await api_client.post("/api/transactions", json=payload, headers=headers)
    assert response.status_code == 422
