import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from psycopg import sql

from asset_pipeline.config.settings import Settings
from asset_pipeline.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "frame_orders_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def integration_pool(test_settings: Settings) -> AsyncGenerator[None, None]:
    try:
        await init_pool(test_settings)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        await close_pool()


@pytest_asyncio.fixture
async def record_table(integration_pool: None) -> AsyncGenerator[str, None]:
    """A throwaway record table name, dropped after the test."""
    table = f"cart_asset_records_{uuid.uuid4().hex[:8]}"
    yield table
    async with get_connection() as conn:
        await conn.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
        await conn.commit()
