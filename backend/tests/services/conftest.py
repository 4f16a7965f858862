"""Service test fixtures — async DB, app collaborators and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path) with foreign keys on
    - app.state collaborators replaced for the duration of the client fixture
    - Dashboard delays are zero in route tests

Design Decisions:
    - File database instead of :memory: so the card-data fan-out can open
      several connections that all see the same rows
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import app.models  # noqa: F401
from app.config import Settings, get_settings
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.revalidation import PathRevalidator
from app.main import app
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.services.password_identity import PasswordIdentityProvider


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}", echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def revalidator():
    return PathRevalidator()


@pytest.fixture
async def client(db_manager, revalidator):
    """FastAPI test client wired to the test database."""
    app.state.db_manager = db_manager
    app.state.revalidator = revalidator
    app.state.identity_provider = PasswordIdentityProvider(db_manager)
    app.dependency_overrides[get_settings] = lambda: Settings(
        revenue_fetch_delay_seconds=0,
        latest_invoices_fetch_delay_seconds=0,
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db_manager
    del app.state.revalidator
    del app.state.identity_provider


@pytest.fixture
async def customers(test_db):
    """Three customers keyed by lower-case first name: steve, amy, lee."""
    rows = [
        Customer(name="Steve Jobs", email="steve@apple.com", image_url="/customers/steve.png"),
        Customer(name="Amy Burns", email="amy@burns.com", image_url="/customers/amy-burns.png"),
        Customer(name="Lee Robinson", email="lee@robinson.com", image_url="/customers/lee-robinson.png"),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return {c.name.split()[0].lower(): c for c in rows}


@pytest.fixture
def make_invoice(test_db):
    """Insert an invoice: await make_invoice(customer, cents, status, day)."""
    async def _make(customer, amount, status="pending", day=1):
        invoice = Invoice(
            customer_id=customer.id,
            amount=amount,
            status=status,
            date=datetime(2024, 1, day, tzinfo=timezone.utc),
        )
        test_db.add(invoice)
        await test_db.commit()
        return invoice
    return _make
