import logging

import pytest_asyncio

from concierge.database.manager import create_db_pool


@pytest_asyncio.fixture
async def db_pool(tmp_path):
    pool = await create_db_pool(
        str(tmp_path / "messages.db"), logging.getLogger(__name__)
    )
    yield pool
    await pool.close()
