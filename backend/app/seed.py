"""Seed Entry Point — `python -m app.seed` populates the configured database.

Invariants:
    - Takes no arguments; reads DATABASE_URL and friends from Settings
    - Exit code 0 on success, 1 on any failure (error logged to stderr)
    - Engine disposed on every path
"""

import asyncio
import logging
import sys

from app.config import Settings, get_settings
from app.db.session import create_session_factory
from app.infrastructure.observability import setup_logging
from app.services.seed_database import SeedReport, seed_database

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> SeedReport:
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            return await seed_database(
                db, password_rounds=settings.password_hash_rounds,
            )
    finally:
        await engine.dispose()


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        asyncio.run(run(settings))
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
