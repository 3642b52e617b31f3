import json
import logging
import os

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from app_utils.config import DATA_DIR, DB_URL, SNAPSHOT_KEY

logger = logging.getLogger(__name__)

engine = create_engine(DB_URL, echo=False)


def init_db(eng=None):
    if eng is None:
        os.makedirs(DATA_DIR, exist_ok=True)
        eng = engine
    with eng.begin() as conn:
        conn.execute(text("""
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT
        )
        """))


def parse_snapshot(raw):
    """Decode a stored answer list; anything malformed counts as no survey."""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored snapshot is not valid JSON, ignoring it")
        return None
    if not isinstance(data, list):
        return None
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in data):
        return None
    return data


class SnapshotStore:
    """Quiz answer snapshot kept in a single key/value row."""

    def __init__(self, eng=None, key=SNAPSHOT_KEY):
        self.engine = eng if eng is not None else engine
        self.key = key

    def load(self):
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    text("SELECT value FROM kv WHERE key=:key"), {"key": self.key}
                ).fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load snapshot: {e}")
            return None
        if not row:
            return None
        return parse_snapshot(row[0])

    def save(self, answers) -> bool:
        payload = json.dumps([int(v) for v in answers])
        try:
            with self.engine.begin() as conn:
                conn.execute(text("""
                    INSERT INTO kv(key, value) VALUES(:key, :value)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """), {"key": self.key, "value": payload})
        except SQLAlchemyError as e:
            logger.error(f"Failed to save snapshot: {e}")
            return False
        logger.info(f"Saved snapshot with {len(answers)} answers")
        return True


class MemorySnapshotStore:
    def __init__(self, raw=None):
        self.raw = raw

    def load(self):
        return parse_snapshot(self.raw)

    def save(self, answers) -> bool:
        self.raw = json.dumps([int(v) for v in answers])
        return True
