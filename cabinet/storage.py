from __future__ import annotations

"""SQLite persistence for registered users and their cards.

The query engine only needs :meth:`CardStore.fetch_cards` and
:meth:`CardStore.is_registered`; the remaining helpers exist so cards can be
seeded by scripts and tests.  Every call opens its own connection, which
keeps the store safe to use from worker threads.
"""

from pathlib import Path
import sqlite3
from typing import Any, Dict, List

__all__ = ["CardStore", "DEFAULT_DB_PATH"]

DEFAULT_DB_PATH = Path("data/cabinet.sqlite")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY,
    is_registered INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner_id INTEGER NOT NULL,
    name TEXT,
    group_name TEXT,
    rarity TEXT,
    condition TEXT,
    image_key TEXT,
    code TEXT
);
CREATE INDEX IF NOT EXISTS idx_cards_owner ON cards(owner_id);
"""


class CardStore:
    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.executescript(_SCHEMA)
        return conn

    # ------------------------------------------------------------------
    def is_registered(self, user_id: int) -> bool:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT is_registered FROM users WHERE user_id = ?", (int(user_id),)
            ).fetchone()
        finally:
            conn.close()
        return bool(row and row["is_registered"])

    def register_user(self, user_id: int) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO users(user_id, is_registered) VALUES (?, 1) "
                    "ON CONFLICT(user_id) DO UPDATE SET is_registered = 1",
                    (int(user_id),),
                )
        finally:
            conn.close()

    # ------------------------------------------------------------------
    def add_card(
        self,
        owner_id: int,
        *,
        name: str | None,
        group: str | None,
        rarity: str | None,
        condition: str | None,
        image_key: str | None = None,
        code: str | None = None,
    ) -> int:
        """Insert a card for ``owner_id`` and return its row id.

        Fields are stored as given; validation happens when cards are queried.
        """
        conn = self._connect()
        try:
            with conn:
                cur = conn.execute(
                    "INSERT INTO cards(owner_id, name, group_name, rarity, condition, image_key, code) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (int(owner_id), name, group, rarity, condition, image_key, code),
                )
            return int(cur.lastrowid)
        finally:
            conn.close()

    def fetch_cards(self, owner_id: int) -> List[Dict[str, Any]]:
        """Return the raw card records owned by ``owner_id`` in insertion order."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT owner_id, name, group_name, rarity, condition, image_key, code "
                "FROM cards WHERE owner_id = ? ORDER BY id",
                (int(owner_id),),
            ).fetchall()
        finally:
            conn.close()
        return [
            {
                "owner_id": row["owner_id"],
                "name": row["name"],
                "group": row["group_name"],
                "rarity": row["rarity"],
                "condition": row["condition"],
                "image_key": row["image_key"],
                "code": row["code"],
            }
            for row in rows
        ]
