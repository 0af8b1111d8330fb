"""
Apply schema.sql to DATABASE_URL.

Usage: python -m equity_coffee.migrate
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import asyncpg

from equity_coffee.core import config, db
from equity_coffee.core.logging import configure_logging

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


async def run_migrations(schema_path: Path = SCHEMA_PATH) -> None:
    sql = schema_path.read_text(encoding="utf-8")
    conn = await asyncpg.connect(
        dsn=db.database_url(),
        ssl="require" if config.is_production() else None,
    )
    try:
        logger.info("applying_schema path=%s", schema_path)
        # Multi-statement script: simple query protocol, no parameters.
        await conn.execute(sql)
        logger.info("schema_applied")
    finally:
        await conn.close()


def main() -> int:
    configure_logging()
    try:
        asyncio.run(run_migrations())
    except (RuntimeError, OSError, asyncpg.PostgresError):
        logger.exception("migration_failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
