"""Invoice Queries — read-only data access behind the dashboard pages.

Invariants:
    - Every function takes its store handle as an argument (no module-level client)
    - Store failures are logged and re-raised as DataFetchError with a fixed
      message naming the operation; the original error is chained, never shown
    - Filtering is a case-insensitive substring match on customer name, customer
      email or status; wildcard characters in the query match literally
    - Pages hold ITEMS_PER_PAGE rows, ordered by date desc then id (stable paging)

Design Decisions:
    - fetch_card_data opens one session per aggregate: an AsyncSession cannot run
      statements concurrently, so each gathered query gets its own
    - Reads return pydantic schemas, except get_user_by_email which returns the
      ORM row (the password hash is needed for sign-in and must not leave the shell)
"""

import asyncio
import functools
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.core.currency import format_currency, from_cents
from app.core.domain_types import (
    ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT, InvoiceId, InvoiceStatus,
)
from app.core.errors import DatabaseError, DataFetchError
from app.core.pagination import page_offset, total_pages
from app.core.repository_protocols import SessionProvider
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.models.revenue import Revenue
from app.models.user import User
from app.schemas.dashboard import CardData, LatestInvoice, RevenueRow
from app.schemas.invoice import CustomerData, InvoiceFormData, InvoiceTableRow

logger = logging.getLogger(__name__)

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_MONTH_INDEX = {m: i for i, m in enumerate(MONTHS)}


def store_read(operation: str, message: str):
    """Log store failures of the wrapped read and re-raise them as DataFetchError."""
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except (SQLAlchemyError, DatabaseError) as e:
                logger.error(
                    f"Database Error in {operation}: {e}",
                    extra={"operation": operation, "error_code": "DATA_FETCH_ERROR"},
                )
                raise DataFetchError(message, operation) from e
        return wrapper
    return decorator


async def simulate_latency(seconds: float, what: str) -> None:
    """Artificial pause used to demo progressive page loading. No-op for 0."""
    if seconds <= 0:
        return
    logger.info(f"Fetching {what}...")
    await asyncio.sleep(seconds)
    logger.info(f"Data fetch complete after {seconds:g} seconds.")


def invoice_filter(query: str):
    """OR-predicate shared by the invoice table and its page count."""
    return or_(
        Customer.name.icontains(query, autoescape=True),
        Customer.email.icontains(query, autoescape=True),
        Invoice.status.icontains(query, autoescape=True),
    )


@store_read("get_user_by_email", "Failed to fetch user.")
async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


@store_read("fetch_revenue", "Failed to fetch revenue data.")
async def fetch_revenue(
    db: AsyncSession, delay_seconds: float = 0.0,
) -> list[RevenueRow]:
    """All revenue rows in calendar order (unrecognised month labels last)."""
    await simulate_latency(delay_seconds, "revenue data")
    result = await db.execute(select(Revenue))
    rows = sorted(
        result.scalars().all(),
        key=lambda r: (_MONTH_INDEX.get(r.month, len(MONTHS)), r.month),
    )
    return [RevenueRow.model_validate(r) for r in rows]


@store_read("fetch_latest_invoices", "Failed to fetch the latest invoices.")
async def fetch_latest_invoices(
    db: AsyncSession, delay_seconds: float = 0.0,
) -> list[LatestInvoice]:
    """The five most recent invoices with customer details and formatted amount."""
    await simulate_latency(delay_seconds, "latest invoices data")
    result = await db.execute(
        select(Invoice)
        .join(Invoice.customer)
        .options(contains_eager(Invoice.customer))
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(LATEST_INVOICES_LIMIT)
    )
    invoices = result.scalars().all()
    return [
        LatestInvoice(
            id=inv.id,
            name=inv.customer.name,
            image_url=inv.customer.image_url,
            email=inv.customer.email,
            amount=format_currency(inv.amount),
        )
        for inv in invoices
    ]


@store_read("fetch_card_data", "Failed to fetch card data.")
async def fetch_card_data(sessions: SessionProvider) -> CardData:
    """Counts and paid/pending totals, queried concurrently."""

    async def scalar(stmt):
        async with sessions.session() as db:
            return await db.scalar(stmt)

    number_of_invoices, number_of_customers, paid, pending = await asyncio.gather(
        scalar(select(func.count()).select_from(Invoice)),
        scalar(select(func.count()).select_from(Customer)),
        scalar(
            select(func.sum(Invoice.amount))
            .where(Invoice.status == InvoiceStatus.PAID.value)
        ),
        scalar(
            select(func.sum(Invoice.amount))
            .where(Invoice.status == InvoiceStatus.PENDING.value)
        ),
    )

    return CardData(
        number_of_invoices=number_of_invoices or 0,
        number_of_customers=number_of_customers or 0,
        total_paid_invoices=format_currency(int(paid or 0)),
        total_pending_invoices=format_currency(int(pending or 0)),
    )


@store_read("fetch_filtered_invoices", "Failed to fetch invoices.")
async def fetch_filtered_invoices(
    db: AsyncSession, query: str, page: int,
) -> list[InvoiceTableRow]:
    """One page of invoices matching `query`, each with its customer."""
    result = await db.execute(
        select(Invoice)
        .join(Invoice.customer)
        .options(contains_eager(Invoice.customer))
        .where(invoice_filter(query))
        .order_by(Invoice.date.desc(), Invoice.id)
        .offset(page_offset(page))
        .limit(ITEMS_PER_PAGE)
    )
    return [InvoiceTableRow.model_validate(inv) for inv in result.scalars().all()]


@store_read("fetch_invoices_pages", "Failed to fetch total number of invoices.")
async def fetch_invoices_pages(db: AsyncSession, query: str) -> int:
    count = await db.scalar(
        select(func.count(Invoice.id))
        .select_from(Invoice)
        .join(Invoice.customer)
        .where(invoice_filter(query))
    )
    return total_pages(count or 0)


@store_read("fetch_invoice_by_id", "Failed to fetch invoice.")
async def fetch_invoice_by_id(
    db: AsyncSession, invoice_id: InvoiceId,
) -> InvoiceFormData | None:
    """Invoice shaped for the edit form (amount in dollars), or None."""
    invoice = await db.get(Invoice, invoice_id)
    if invoice is None:
        return None
    return InvoiceFormData(
        id=invoice.id,
        customer_id=invoice.customer_id,
        amount=from_cents(invoice.amount),
        status=invoice.status,
    )


@store_read("fetch_customers", "Failed to fetch all customers.")
async def fetch_customers(db: AsyncSession) -> list[CustomerData]:
    result = await db.execute(select(Customer).order_by(Customer.name.asc()))
    return [CustomerData.model_validate(c) for c in result.scalars().all()]
