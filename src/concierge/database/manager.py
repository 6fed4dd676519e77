import aiosqlite
from aiosqlitepool import SQLiteConnectionPool
import os
from litestar.types.protocols import Logger


async def init_database(db_pool: SQLiteConnectionPool) -> None:
    async with db_pool.connection() as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS subscribers (
                phone_number TEXT PRIMARY KEY,
                opted_in INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                phone_number TEXT NOT NULL,
                message TEXT NOT NULL,
                sender TEXT NOT NULL,
                received_at TEXT NOT NULL
            )
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_messages_phone_number_received_at
            ON messages(phone_number, received_at)
        """)
        await db.commit()  # type: ignore


async def create_db_pool(
    db_path: str, logger: Logger, in_memory: bool = False
) -> SQLiteConnectionPool:
    def sqlite_connection() -> aiosqlite.Connection:
        if in_memory:
            logger.info("Creating in-memory database connection")
            return aiosqlite.connect("file::memory:?cache=shared", uri=True)

        logger.info("Creating connection to database at %s", db_path)
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return aiosqlite.connect(db_path)

    db_pool = SQLiteConnectionPool(connection_factory=sqlite_connection)  # type: ignore
    await init_database(db_pool)
    logger.info("Database initialized")
    return db_pool
