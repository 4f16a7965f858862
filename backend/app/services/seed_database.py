"""Seed Database — one-shot population of users, customers, invoices and revenue.

Invariants:
    - Users, customers (by email) and revenue (by month) are inserted only when
      missing; existing rows are left untouched
    - Invoices are inserted unconditionally: seeding twice duplicates them
    - Everything runs in one transaction; the first failure rolls all of it back
    - Passwords are bcrypt-hashed off the event loop before insert
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.passwords import DEFAULT_ROUNDS, hash_password
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.models.revenue import Revenue
from app.models.user import User
from app.services import placeholder_data

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    """Rows inserted per table in one run."""
    users: int = 0
    customers: int = 0
    invoices: int = 0
    revenue: int = 0


async def _exists(db: AsyncSession, column, value) -> bool:
    found = await db.scalar(select(column).where(column == value).limit(1))
    return found is not None


async def seed_users(
    db: AsyncSession, users: Iterable[dict[str, Any]], rounds: int,
) -> int:
    created = 0
    for user in users:
        if await _exists(db, User.email, user["email"]):
            continue
        hashed = await asyncio.to_thread(hash_password, user["password"], rounds)
        db.add(User(
            id=user["id"], name=user["name"],
            email=user["email"], password=hashed,
        ))
        created += 1
    await db.flush()
    return created


async def seed_customers(db: AsyncSession, customers: Iterable[dict[str, Any]]) -> int:
    created = 0
    for customer in customers:
        if await _exists(db, Customer.email, customer["email"]):
            continue
        db.add(Customer(**customer))
        created += 1
    await db.flush()
    return created


async def seed_invoices(db: AsyncSession, invoices: Iterable[dict[str, Any]]) -> int:
    rows = [Invoice(**invoice) for invoice in invoices]
    db.add_all(rows)
    await db.flush()
    return len(rows)


async def seed_revenue(db: AsyncSession, revenue: Iterable[dict[str, Any]]) -> int:
    created = 0
    for row in revenue:
        if await _exists(db, Revenue.month, row["month"]):
            continue
        db.add(Revenue(**row))
        created += 1
    await db.flush()
    return created


async def seed_database(
    db: AsyncSession, password_rounds: int = DEFAULT_ROUNDS,
) -> SeedReport:
    """Load the placeholder dataset and commit. Rolls back on any failure."""
    try:
        report = SeedReport(
            users=await seed_users(db, placeholder_data.USERS, password_rounds),
            customers=await seed_customers(db, placeholder_data.CUSTOMERS),
            invoices=await seed_invoices(db, placeholder_data.INVOICES),
            revenue=await seed_revenue(db, placeholder_data.REVENUE),
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(
        f"Seeded {report.users} users, {report.customers} customers, "
        f"{report.invoices} invoices, {report.revenue} revenue rows",
    )
    return report
