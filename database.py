import logging
import sqlite3
from contextlib import contextmanager
from config import Config
from database_schemas import ALL_TABLE_SCHEMAS

logger = logging.getLogger(__name__)

DB_NAME = Config.DATABASE_PATH

@contextmanager
def get_db():
    conn = sqlite3.connect(DB_NAME)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()

def init_db():
    with get_db() as conn:
        cursor = conn.cursor()
        for schema in ALL_TABLE_SCHEMAS:
            cursor.execute(schema)
        conn.commit()
    logger.info("Database initialized at %s", DB_NAME)

def check_connection() -> bool:
    """Run a trivial query; True when the database answers."""
    try:
        with get_db() as conn:
            conn.execute("SELECT 1").fetchone()
        return True
    except sqlite3.Error as e:
        logger.error("Database health check failed: %s", e)
        return False

if __name__ == "__main__":
    init_db()
