from typing import Optional
from aiosqlitepool import SQLiteConnectionPool
from litestar.types.protocols import Logger

from concierge.outcome import safe_step
from concierge.schemas.conversation import SubscriberRecord


class SubscriberRegistry:
    """Opt-in status per phone number. A missing row means not opted in."""

    def __init__(self, db_pool: SQLiteConnectionPool, logger: Logger):
        self.db_pool = db_pool
        self.logger = logger

    async def lookup(self, address: str) -> Optional[SubscriberRecord]:
        async with self.db_pool.connection() as db:
            cursor = await db.execute(
                "SELECT phone_number, opted_in FROM subscribers WHERE phone_number = ?",
                (address,),
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return SubscriberRecord(address=row[0], opted_in=bool(row[1]))

    @safe_step(fallback=lambda: False)
    async def get_status(self, address: str) -> bool:
        record = await self.lookup(address)
        return record is not None and record.opted_in

    @safe_step(fallback=lambda: False)
    async def set_status(self, address: str, opted_in: bool) -> bool:
        """Upsert the opt-in flag, leaving every other column untouched."""
        async with self.db_pool.connection() as db:
            await db.execute(
                """
                INSERT INTO subscribers (phone_number, opted_in) VALUES (?, ?)
                ON CONFLICT(phone_number) DO UPDATE SET
                    opted_in = excluded.opted_in,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (address, int(opted_in)),
            )
            await db.commit()  # type: ignore

        self.logger.info(f"Set opted_in={opted_in} for {address}")
        return opted_in
