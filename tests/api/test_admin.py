"""Tests for admin dashboard endpoints."""

import csv
import io
from datetime import date, datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from paywise.core.config import settings
from paywise.models import AffiliateClick, AffiliateSession, Lead
from paywise.models.base import utcnow

ADMIN_KEY = "test-admin-key"
ADMIN_HEADERS = {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def admin_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure an admin key for the duration of a test."""
    monkeypatch.setattr(settings, "admin_api_key", ADMIN_KEY)
    return ADMIN_KEY


async def _seed_leads(session_factory: async_sessionmaker[AsyncSession]) -> None:
    now = utcnow()
    async with session_factory() as session:
        session.add_all(
            [
                Lead(email="ana@example.com", name="Ana", income_range="50k-75k", source="paycheck"),
                Lead(email="ben@example.com", name="Ben", income_range="50k-75k", source="budget"),
                Lead(
                    email="cy@example.com",
                    income_range="100k+",
                    source="paycheck",
                    unsubscribed=True,
                    created_at=now - timedelta(days=20),
                ),
                Lead(email="old@example.com", source="paycheck", created_at=now - timedelta(days=90)),
            ]
        )
        await session.commit()


async def _seed_clicks(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        session.add_all(
            [
                AffiliateClick(
                    affiliate_name="Acme Bank",
                    affiliate_url="https://acme.example",
                    category="savings",
                    page_source="/budget",
                    session_id="s1",
                    referrer="https://search.example/",
                    device_type="mobile",
                    browser="Safari",
                    clicked_at=datetime(2025, 3, 1, 10, 0),
                ),
                AffiliateClick(
                    affiliate_name="Acme Bank",
                    affiliate_url="https://acme.example",
                    category="savings",
                    page_source="/paycheck",
                    session_id="s1",
                    device_type="desktop",
                    browser="Chrome",
                    clicked_at=datetime(2025, 3, 1, 18, 30),
                ),
                AffiliateClick(
                    affiliate_name="Loanly",
                    affiliate_url="https://loanly.example",
                    category="loans",
                    page_source="/budget",
                    session_id="s2",
                    device_type="desktop",
                    browser="Chrome",
                    clicked_at=datetime(2025, 3, 3, 9, 0),
                ),
                AffiliateClick(
                    affiliate_name="Loanly",
                    affiliate_url="https://loanly.example",
                    category="loans",
                    page_source="/budget",
                    session_id="s9",
                    device_type="desktop",
                    browser="Chrome",
                    clicked_at=datetime(2025, 4, 15, 9, 0),
                ),
            ]
        )
        await session.commit()


# =============================================================================
# Access control
# =============================================================================


@pytest.mark.asyncio
async def test_admin_disabled_without_configured_key(
    api_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "admin_api_key", None)
    response = await api_client.get("/api/admin/leads", headers=ADMIN_HEADERS)
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_wrong_or_missing_key_rejected(api_client: AsyncClient, admin_key: str) -> None:
    assert (await api_client.get("/api/admin/leads")).status_code == 401
    wrong = await api_client.get("/api/admin/leads", headers={"X-Admin-Key": "guess"})
    assert wrong.status_code == 401


# =============================================================================
# Leads
# =============================================================================


@pytest.mark.asyncio
async def test_list_leads_with_search_and_pagination(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed_leads(session_factory)

    response = await api_client.get("/api/admin/leads", params={"limit": 3}, headers=ADMIN_HEADERS)
    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 4
    assert payload["total_pages"] == 2
    assert len(payload["items"]) == 3
    assert payload["items"][-1]["email"] == "cy@example.com"

    search = await api_client.get(
        "/api/admin/leads", params={"search": "BEN"}, headers=ADMIN_HEADERS
    )
    assert [lead["email"] for lead in search.json()["items"]] == ["ben@example.com"]


@pytest.mark.asyncio
async def test_lead_stats(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed_leads(session_factory)

    response = await api_client.get("/api/admin/leads/stats", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total"] == 4
    assert stats["today"] == 2
    assert stats["this_week"] == 2
    assert stats["this_month"] == 3
    assert stats["unsubscribed"] == 1
    assert stats["by_income_range"][0] == {"key": "50k-75k", "count": 2}
    assert {"key": "paycheck", "count": 3} in stats["by_source"]


@pytest.mark.asyncio
async def test_export_leads_csv(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed_leads(session_factory)

    response = await api_client.get("/api/admin/leads/export", headers=ADMIN_HEADERS)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["email", "name", "income_range", "source", "unsubscribed", "created_at"]
    assert len(rows) == 5
    cy = next(row for row in rows if row[0] == "cy@example.com")
    assert cy[4] == "yes"


@pytest.mark.asyncio
async def test_delete_lead(
    api_client: AsyncClient,
    admin_key: str,
) -> None:
    created = (await api_client.post("/api/leads", json={"email": "gone@example.com"})).json()

    response = await api_client.delete(f"/api/admin/leads/{created['id']}", headers=ADMIN_HEADERS)
    assert response.status_code == 204

    again = await api_client.delete(f"/api/admin/leads/{created['id']}", headers=ADMIN_HEADERS)
    assert again.status_code == 404


# =============================================================================
# Affiliate analytics
# =============================================================================


@pytest.mark.asyncio
async def test_affiliate_overview(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed_clicks(session_factory)

    response = await api_client.get(
        "/api/admin/affiliates/overview",
        params={"start_date": "2025-03-01", "end_date": "2025-03-31"},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 200
    overview = response.json()
    assert overview["summary"] == {
        "total_clicks": 3,
        "unique_sessions": 2,
        "unique_affiliates": 2,
        "total_sessions": 0,
        "sessions_with_clicks": 0,
        "ctr": 0.0,
        "bounce_rate": 0.0,
        "avg_pages_per_session": 0.0,
    }
    assert overview["by_affiliate"][0] == {"key": "Acme Bank", "count": 2}
    assert overview["by_page"][0] == {"key": "/budget", "count": 2}
    assert {"key": "mobile", "count": 1} in overview["by_device"]
    assert [bucket["key"] for bucket in overview["daily_clicks"]] == ["2025-03-01", "2025-03-03"]
    assert overview["top_referrers"] == [{"key": "https://search.example/", "count": 1}]


@pytest.mark.asyncio
async def test_affiliate_overview_session_engagement(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    march = datetime(2025, 3, 10, 12, 0)
    # (session id, pages visited, affiliate clicks)
    engagement = [
        ("browsed", 3, 1),
        ("bounced", 1, 0),
        ("landed-and-clicked", 1, 2),
        ("read-only", 3, 0),
    ]
    async with session_factory() as session:
        session.add_all(
            AffiliateSession(
                session_id=session_id,
                pages_visited=pages,
                affiliate_clicks=clicks,
                started_at=march,
            )
            for session_id, pages, clicks in engagement
        )
        session.add(
            AffiliateSession(
                session_id="april",
                pages_visited=1,
                affiliate_clicks=0,
                started_at=datetime(2025, 4, 2, 9, 0),
            )
        )
        await session.commit()

    response = await api_client.get(
        "/api/admin/affiliates/overview",
        params={"start_date": "2025-03-01", "end_date": "2025-03-31"},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["total_sessions"] == 4
    assert summary["sessions_with_clicks"] == 2
    assert summary["ctr"] == 50.0
    assert summary["bounce_rate"] == 25.0
    assert summary["avg_pages_per_session"] == 2.0


@pytest.mark.asyncio
async def test_affiliate_overview_requires_valid_range(
    api_client: AsyncClient, admin_key: str
) -> None:
    missing = await api_client.get("/api/admin/affiliates/overview", headers=ADMIN_HEADERS)
    assert missing.status_code == 422

    reversed_range = await api_client.get(
        "/api/admin/affiliates/overview",
        params={"start_date": "2025-04-01", "end_date": "2025-03-01"},
        headers=ADMIN_HEADERS,
    )
    assert reversed_range.status_code == 400


@pytest.mark.asyncio
async def test_export_affiliate_clicks_csv(
    api_client: AsyncClient,
    admin_key: str,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed_clicks(session_factory)

    response = await api_client.get(
        "/api/admin/affiliates/export",
        params={"start_date": "2025-04-01", "end_date": "2025-04-30"},
        headers=ADMIN_HEADERS,
    )
    assert response.status_code == 200
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "clicked_at"
    assert len(rows) == 2
    assert rows[1][1] == "Loanly"
    assert "2025-04-01-to-2025-04-30" in response.headers["content-disposition"]
    assert date(2025, 4, 15).isoformat() in rows[1][0]
