"""Invoice Queries — read paths against a real (SQLite) store.

Tests cover:
    - Card data aggregates and currency formatting
    - Case-insensitive filtering across name, email and status
    - Pagination is stable, exhaustive and agrees with the page count
    - Latest invoices, revenue order, invoice form data, customer order
    - Store failures surface as DataFetchError with a fixed message
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DataFetchError
from app.models.revenue import Revenue
from app.models.user import User
from app.services.invoice_queries import (
    fetch_card_data,
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
    get_user_by_email,
)


# ─── Card data ──────────────────────────────────────────────────

async def test_card_data_sums_paid_and_pending(db_manager, customers, make_invoice):
    steve, amy = customers["steve"], customers["amy"]
    for cents in (1000, 2000, 3000):
        await make_invoice(steve, cents, "paid")
    for cents in (500, 1500):
        await make_invoice(amy, cents, "pending")

    cards = await fetch_card_data(db_manager)

    assert cards.total_paid_invoices == "$60.00"
    assert cards.total_pending_invoices == "$20.00"
    assert cards.number_of_invoices == 5
    assert cards.number_of_customers == 3


async def test_card_data_defaults_missing_sums_to_zero(db_manager, customers):
    cards = await fetch_card_data(db_manager)
    assert cards.number_of_invoices == 0
    assert cards.total_paid_invoices == "$0.00"
    assert cards.total_pending_invoices == "$0.00"


async def test_card_data_failure_is_wrapped(db_manager, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(AsyncSession, "scalar", broken)
    with pytest.raises(DataFetchError) as exc_info:
        await fetch_card_data(db_manager)
    assert exc_info.value.message == "Failed to fetch card data."
    assert exc_info.value.http_status == 503


# ─── Filtering ──────────────────────────────────────────────────

async def test_filter_is_case_insensitive(test_db, customers, make_invoice):
    await make_invoice(customers["steve"], 1000)
    await make_invoice(customers["amy"], 2000)

    upper = await fetch_filtered_invoices(test_db, "STE", 1)
    lower = await fetch_filtered_invoices(test_db, "ste", 1)

    assert [r.id for r in upper] == [r.id for r in lower]
    assert len(lower) == 1
    assert lower[0].customer.name == "Steve Jobs"


async def test_filter_matches_email(test_db, customers, make_invoice):
    await make_invoice(customers["lee"], 1000)
    await make_invoice(customers["amy"], 2000)

    rows = await fetch_filtered_invoices(test_db, "robinson.com", 1)

    assert [r.customer.email for r in rows] == ["lee@robinson.com"]


async def test_filter_matches_status(test_db, customers, make_invoice):
    await make_invoice(customers["steve"], 1000, "paid")
    await make_invoice(customers["amy"], 2000, "pending")

    rows = await fetch_filtered_invoices(test_db, "PAID", 1)

    assert [r.status.value for r in rows] == ["paid"]


async def test_filter_treats_wildcards_literally(test_db, customers, make_invoice):
    await make_invoice(customers["steve"], 1000)
    assert await fetch_filtered_invoices(test_db, "%", 1) == []
    assert await fetch_filtered_invoices(test_db, "_", 1) == []


async def test_empty_query_matches_everything(test_db, customers, make_invoice):
    for i, name in enumerate(("steve", "amy", "lee"), start=1):
        await make_invoice(customers[name], 100 * i)
    assert len(await fetch_filtered_invoices(test_db, "", 1)) == 3


async def test_rows_are_newest_first_with_customer(test_db, customers, make_invoice):
    await make_invoice(customers["steve"], 1000, day=3)
    await make_invoice(customers["amy"], 2000, day=9)

    rows = await fetch_filtered_invoices(test_db, "", 1)

    assert [r.customer.name for r in rows] == ["Amy Burns", "Steve Jobs"]
    assert rows[0].amount == 2000
    assert rows[0].customer.image_url == "/customers/amy-burns.png"


# ─── Pagination ─────────────────────────────────────────────────

async def test_pages_are_exhaustive_and_disjoint(test_db, customers, make_invoice):
    for day in range(1, 15):
        await make_invoice(customers["steve"], 100 * day, day=(day % 7) + 1)
    await make_invoice(customers["amy"], 999)

    pages = await fetch_invoices_pages(test_db, "steve")
    seen = []
    for page in range(1, pages + 1):
        seen.extend(r.id for r in await fetch_filtered_invoices(test_db, "steve", page))

    assert pages == 3
    assert len(seen) == 14
    assert len(set(seen)) == 14


async def test_page_count_is_ceiling_of_matches(test_db, customers, make_invoice):
    assert await fetch_invoices_pages(test_db, "") == 0
    for _ in range(6):
        await make_invoice(customers["lee"], 100)
    assert await fetch_invoices_pages(test_db, "") == 1
    await make_invoice(customers["lee"], 100)
    assert await fetch_invoices_pages(test_db, "") == 2


async def test_page_past_the_end_is_empty(test_db, customers, make_invoice):
    await make_invoice(customers["lee"], 100)
    assert await fetch_filtered_invoices(test_db, "", 5) == []


async def test_page_below_one_reads_first_page(test_db, customers, make_invoice):
    await make_invoice(customers["lee"], 100)
    assert len(await fetch_filtered_invoices(test_db, "", 0)) == 1


async def test_huge_page_number_reads_an_empty_page(test_db, customers, make_invoice):
    await make_invoice(customers["lee"], 100)
    assert await fetch_filtered_invoices(test_db, "", 10**20) == []


# ─── Latest invoices ────────────────────────────────────────────

async def test_latest_invoices_returns_five_newest(test_db, customers, make_invoice):
    for day in range(1, 8):
        await make_invoice(customers["amy"], 1000 * day, day=day)

    latest = await fetch_latest_invoices(test_db)

    assert len(latest) == 5
    assert [inv.amount for inv in latest] == [
        "$70.00", "$60.00", "$50.00", "$40.00", "$30.00",
    ]
    assert latest[0].name == "Amy Burns"
    assert latest[0].email == "amy@burns.com"


async def test_latest_invoices_waits_for_configured_delay(
    test_db, customers, monkeypatch,
):
    pause = AsyncMock()
    monkeypatch.setattr("app.services.invoice_queries.simulate_latency", pause)
    await fetch_latest_invoices(test_db, delay_seconds=2)
    pause.assert_awaited_once_with(2, "latest invoices data")


# ─── Revenue ────────────────────────────────────────────────────

async def test_revenue_in_calendar_order(test_db):
    test_db.add_all([
        Revenue(month="Mar", revenue=2200),
        Revenue(month="Jan", revenue=2000),
        Revenue(month="Dec", revenue=4800),
        Revenue(month="Feb", revenue=1800),
    ])
    await test_db.commit()

    rows = await fetch_revenue(test_db)

    assert [r.month for r in rows] == ["Jan", "Feb", "Mar", "Dec"]
    assert rows[0].revenue == 2000


async def test_revenue_waits_for_configured_delay(test_db, monkeypatch):
    pause = AsyncMock()
    monkeypatch.setattr("app.services.invoice_queries.simulate_latency", pause)
    await fetch_revenue(test_db, delay_seconds=3)
    pause.assert_awaited_once_with(3, "revenue data")


async def test_revenue_failure_is_wrapped():
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    with pytest.raises(DataFetchError, match="Failed to fetch revenue data."):
        await fetch_revenue(db)


# ─── Point lookups ──────────────────────────────────────────────

async def test_invoice_by_id_converts_cents_to_dollars(test_db, customers, make_invoice):
    invoice = await make_invoice(customers["steve"], 15795, "paid")

    form = await fetch_invoice_by_id(test_db, invoice.id)

    assert form.amount == Decimal("157.95")
    assert form.customer_id == customers["steve"].id
    assert form.status.value == "paid"


async def test_invoice_by_id_missing_returns_none(test_db):
    assert await fetch_invoice_by_id(test_db, uuid4()) is None


async def test_customers_sorted_by_name(test_db, customers):
    rows = await fetch_customers(test_db)
    assert [c.name for c in rows] == ["Amy Burns", "Lee Robinson", "Steve Jobs"]


async def test_user_by_email(test_db):
    test_db.add(User(name="User", email="user@nextmail.com", password="hash"))
    await test_db.commit()

    assert (await get_user_by_email(test_db, "user@nextmail.com")).name == "User"
    assert await get_user_by_email(test_db, "nobody@nextmail.com") is None


async def test_user_lookup_failure_is_wrapped():
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    with pytest.raises(DataFetchError) as exc_info:
        await get_user_by_email(db, "user@nextmail.com")
    assert exc_info.value.message == "Failed to fetch user."
    assert exc_info.value.operation == "get_user_by_email"
