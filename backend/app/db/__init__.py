"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - One async engine per DatabaseSessionManager, built at startup
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for the test suite
"""
