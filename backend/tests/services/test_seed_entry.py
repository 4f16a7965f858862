"""Seed Entry Point — exit codes and error reporting of `python -m app.seed`.

Invariants:
    - Exit code 0 after a successful run, 1 after any failure
    - The failure is logged at ERROR with its traceback
"""

import logging

import pytest
from sqlalchemy import create_engine, func, select

import app.models  # noqa: F401
from app import seed
from app.config import Settings
from app.db.base import Base
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.services import placeholder_data


@pytest.fixture
def seed_settings(tmp_path, monkeypatch):
    """Point the entry point at a temp SQLite file; returns the file path."""
    path = tmp_path / "seed.db"
    monkeypatch.setattr(seed, "get_settings", lambda: Settings(
        database_url=f"sqlite+aiosqlite:///{path}",
        password_hash_rounds=4,
        log_format="text",
    ))
    monkeypatch.setattr(seed, "setup_logging", lambda level, fmt: None)
    return path


def test_main_seeds_and_exits_zero(seed_settings):
    engine = create_engine(f"sqlite:///{seed_settings}")
    Base.metadata.create_all(engine)

    assert seed.main() == 0

    with engine.connect() as conn:
        customers = conn.scalar(select(func.count()).select_from(Customer))
        invoices = conn.scalar(select(func.count()).select_from(Invoice))
    engine.dispose()
    assert customers == len(placeholder_data.CUSTOMERS)
    assert invoices == len(placeholder_data.INVOICES)


def test_main_exits_one_when_schema_is_missing(seed_settings, caplog):
    with caplog.at_level(logging.ERROR, logger="app.seed"):
        assert seed.main() == 1

    record = next(r for r in caplog.records if r.name == "app.seed")
    assert record.getMessage().startswith("Seeding failed")
    assert record.exc_info is not None


def test_main_exits_one_when_seeding_raises(seed_settings, monkeypatch, caplog):
    async def broken(db, password_rounds):
        raise RuntimeError("disk full")

    monkeypatch.setattr(seed, "seed_database", broken)

    with caplog.at_level(logging.ERROR, logger="app.seed"):
        assert seed.main() == 1

    assert "disk full" in caplog.text
