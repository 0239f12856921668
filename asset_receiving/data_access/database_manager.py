# asset_receiving/data_access/database_manager.py

import sqlite3
import logging
from typing import Any, Optional, Sequence
from asset_receiving.config import DATABASE_PATH, LOGGING_CONFIG

logger = logging.getLogger(__name__)

LOCAL_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT
    );
    """,
)


class DatabaseManager:
    """
    Local sqlite file. Receipts live on the backend; this store only keeps
    client-side settings such as the login session. Each call opens and
    closes its own connection.
    """

    def __init__(self, db_path: str = DATABASE_PATH):
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> sqlite3.Connection:
        try:
            self.conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Cannot open local store {self.db_path}: {e}")
            raise
        self.conn.row_factory = sqlite3.Row
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def _run(self, query: str, params: Optional[Sequence[Any]], fetch: Optional[str] = None):
        try:
            with self as conn:
                cursor = conn.execute(query, tuple(params or ()))
                if fetch == "one":
                    return cursor.fetchone()
                if fetch == "all":
                    return cursor.fetchall()
                conn.commit()
                return cursor.rowcount
        except sqlite3.Error as e:
            logger.error(f"Local query failed: {query.strip()} params={params} - {e}")
            raise

    def execute_query(self, query: str, params: Optional[Sequence[Any]] = None) -> int:
        """Runs a write statement and returns the affected row count."""
        return self._run(query, params)

    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[sqlite3.Row]:
        return self._run(query, params, fetch="one")

    def fetch_all(self, query: str, params: Optional[Sequence[Any]] = None) -> list:
        return self._run(query, params, fetch="all")

    def create_tables(self):
        try:
            with self as conn:
                for statement in LOCAL_SCHEMA:
                    conn.execute(statement)
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize local database schema: {e}", exc_info=True)
            raise
        logger.info(f"Local store ready at {self.db_path}.")


if __name__ == '__main__':
    import logging.config
    logging.config.dictConfig(LOGGING_CONFIG)

    manager = DatabaseManager()
    manager.create_tables()
    rows = manager.fetch_all("SELECT key FROM settings ORDER BY key")
    logging.getLogger().info(f"{len(rows)} setting(s) stored in {manager.db_path}: {[r['key'] for r in rows]}")
