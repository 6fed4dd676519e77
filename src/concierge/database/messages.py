from datetime import datetime, timezone
from typing import List, Optional
from aiosqlitepool import SQLiteConnectionPool
from litestar.types.protocols import Logger

from concierge.outcome import safe_step
from concierge.schemas.conversation import MessageRecord, Sender


class MessageStore:
    """Append-only log of conversation messages keyed by phone number."""

    def __init__(self, db_pool: SQLiteConnectionPool, logger: Logger):
        self.db_pool = db_pool
        self.logger = logger

    @safe_step()
    async def append(
        self,
        address: str,
        body: str,
        sender: Sender,
        timestamp: Optional[datetime] = None,
    ) -> MessageRecord:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        # Stored as UTC ISO text so ordering by the column is chronological
        timestamp = timestamp.astimezone(timezone.utc)

        async with self.db_pool.connection() as db:
            cursor = await db.execute(
                "INSERT INTO messages (phone_number, message, sender, received_at) VALUES (?, ?, ?, ?)",
                (
                    address,
                    body,
                    sender.value,
                    timestamp.isoformat(timespec="microseconds"),
                ),
            )
            await db.commit()  # type: ignore

        return MessageRecord(
            address=address,
            body=body,
            sender=sender,
            received_at=timestamp,
            id=cursor.lastrowid,
        )

    @safe_step(fallback=list)
    async def recent(self, address: str, limit: int) -> List[MessageRecord]:
        """Load up to limit messages for a phone number, newest first."""
        async with self.db_pool.connection() as db:
            cursor = await db.execute(
                """
                SELECT id, phone_number, message, sender, received_at FROM messages
                WHERE phone_number = ?
                ORDER BY received_at DESC, id DESC
                LIMIT ?
                """,
                (address, limit),
            )
            rows = await cursor.fetchall()

        return [
            MessageRecord(
                address=row[1],
                body=row[2],
                sender=Sender(row[3]),
                received_at=datetime.fromisoformat(row[4]),
                id=row[0],
            )
            for row in rows
        ]
