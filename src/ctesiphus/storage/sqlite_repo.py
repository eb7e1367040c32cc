"""SQLite-based repository implementation.

Campaign snapshots are stored as a JSON ``data`` column next to a few indexed
summary columns used for listing.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .repository import CampaignRepository

logger = logging.getLogger(__name__)


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> dict:
    """Convert sqlite3 row to dict."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class SQLiteCampaignRepository(CampaignRepository):
    """SQLite-based campaign repository."""

    def __init__(self, database_uri: str = "instance/ctesiphus.db"):
        """Initialize repository.

        Args:
            database_uri: Path to SQLite database file
        """
        self.database_path = Path(database_uri)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = dict_factory
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS campaigns (
                id TEXT PRIMARY KEY,
                campaign_name TEXT,
                round INTEGER DEFAULT 1,
                threat_level INTEGER DEFAULT 1,
                game_ended INTEGER DEFAULT 0,
                data TEXT NOT NULL,
                created_at TEXT,
                updated_at TEXT
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_campaigns_updated ON campaigns(updated_at)")
        conn.commit()
        conn.close()

    def save_campaign(self, campaign_id: str, snapshot: dict) -> None:
        """Persist a complete campaign snapshot."""
        now = datetime.now(timezone.utc).isoformat()

        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO campaigns (id, campaign_name, round, threat_level, game_ended, data, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                campaign_name = excluded.campaign_name,
                round = excluded.round,
                threat_level = excluded.threat_level,
                game_ended = excluded.game_ended,
                data = excluded.data,
                updated_at = excluded.updated_at
        """, (
            campaign_id,
            snapshot.get("campaign_name", ""),
            snapshot.get("current_round", 1),
            snapshot.get("threat_level", 1),
            int(bool(snapshot.get("game_ended", False))),
            json.dumps(snapshot),
            now,
            now,
        ))
        conn.commit()
        conn.close()
        logger.debug(f"Saved campaign {campaign_id} to {self.database_path}")

    def load_campaign(self, campaign_id: str) -> Optional[dict]:
        """Load a campaign snapshot by ID."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT data FROM campaigns WHERE id = ?", (campaign_id,))
        row = cursor.fetchone()
        conn.close()

        if row is None:
            return None
        return json.loads(row["data"])

    def list_campaigns(self) -> list[dict]:
        """List stored campaigns, most recently updated first."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, campaign_name, round, threat_level, game_ended, updated_at
            FROM campaigns
            ORDER BY updated_at DESC
        """)
        rows = cursor.fetchall()
        conn.close()
        for row in rows:
            row["game_ended"] = bool(row["game_ended"])
        return rows

    def delete_campaign(self, campaign_id: str) -> bool:
        """Delete a campaign record."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM campaigns WHERE id = ?", (campaign_id,))
        deleted = cursor.rowcount > 0
        conn.commit()
        conn.close()
        return deleted
