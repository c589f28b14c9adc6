#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
SQLite persistence for chats, chat messages and the synced review table.
"""
import json
import sqlite3
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from config.settings import Settings
from utils.errors import ChatNotFoundError, StorageError
from utils.logger import get_logger
from utils.text_processing import utc_now_iso

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS chats (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS messages (
    id TEXT PRIMARY KEY,
    chat_id TEXT NOT NULL REFERENCES chats(id) ON DELETE CASCADE,
    role TEXT NOT NULL CHECK (role IN ('user', 'assistant')),
    content TEXT NOT NULL,
    type TEXT NOT NULL DEFAULT 'text' CHECK (type IN ('text', 'analysis')),
    analysis_data TEXT,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_messages_chat_id ON messages(chat_id);

CREATE TABLE IF NOT EXISTS reviews (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    rating INTEGER,
    author TEXT NOT NULL,
    date TEXT NOT NULL,
    helpful_votes INTEGER NOT NULL DEFAULT 0,
    verified_purchase BOOLEAN NOT NULL DEFAULT 0
);
"""

_REVIEW_COLUMNS = (
    "id", "title", "content", "rating", "author", "date", "helpful_votes", "verified_purchase"
)


class ChatStore:
    """Chats, messages and reviews kept in one SQLite database file."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.db_path = settings.database_path
        self._ready = False

    @contextmanager
    def get_conn(self):
        if not self._ready:
            self.init_db()
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row  # Return rows as dict-like objects
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the database file and tables if they do not exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        finally:
            conn.close()
        self._ready = True
        logger.info("Database ready at %s", self.db_path)

    # ---------------- chats ----------------

    def list_chats(self) -> List[Dict[str, Any]]:
        """All chats, most recently updated first."""
        with self.get_conn() as conn:
            rows = conn.execute(
                "SELECT id, title, created_at, updated_at FROM chats "
                "ORDER BY updated_at DESC, rowid DESC"
            ).fetchall()
        return [dict(row) for row in rows]

    def create_chat(self, title: str) -> Dict[str, Any]:
        now = utc_now_iso()
        chat = {"id": str(uuid.uuid4()), "title": title, "created_at": now, "updated_at": now}
        with self.get_conn() as conn:
            conn.execute(
                "INSERT INTO chats (id, title, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (chat["id"], chat["title"], chat["created_at"], chat["updated_at"]),
            )
            conn.commit()
        logger.info("Created chat %s", chat["id"])
        return chat

    def get_chat(self, chat_id: str) -> Optional[Dict[str, Any]]:
        with self.get_conn() as conn:
            row = conn.execute(
                "SELECT id, title, created_at, updated_at FROM chats WHERE id = ?", (chat_id,)
            ).fetchone()
        return dict(row) if row else None

    def delete_chat(self, chat_id: str) -> bool:
        """Delete a chat and its messages. Returns False when nothing was deleted."""
        with self.get_conn() as conn:
            deleted = conn.execute("DELETE FROM chats WHERE id = ?", (chat_id,)).rowcount > 0
            conn.commit()
        if deleted:
            logger.info("Deleted chat %s", chat_id)
        else:
            logger.info("Delete requested for unknown chat %s", chat_id)
        return deleted

    def touch_chat(self, chat_id: str) -> None:
        """Bump ``updated_at`` so the chat moves to the top of the list."""
        with self.get_conn() as conn:
            conn.execute("UPDATE chats SET updated_at = ? WHERE id = ?", (utc_now_iso(), chat_id))
            conn.commit()

    def count_chats(self) -> int:
        with self.get_conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM chats").fetchone()[0]

    # ---------------- messages ----------------

    def list_messages(self, chat_id: str) -> List[Dict[str, Any]]:
        """Messages of a chat, oldest first."""
        with self.get_conn() as conn:
            exists = conn.execute("SELECT 1 FROM chats WHERE id = ?", (chat_id,)).fetchone()
            if not exists:
                raise ChatNotFoundError(chat_id)
            rows = conn.execute(
                "SELECT id, chat_id, role, content, type, analysis_data, created_at "
                "FROM messages WHERE chat_id = ? ORDER BY created_at ASC, rowid ASC",
                (chat_id,),
            ).fetchall()

        messages = []
        for row in rows:
            message = dict(row)
            if message["analysis_data"] is not None:
                message["analysis_data"] = json.loads(message["analysis_data"])
            messages.append(message)
        return messages

    def add_message(
        self,
        chat_id: str,
        role: str,
        content: str,
        message_type: str = "text",
        analysis_data: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Store a message and return its id."""
        message_id = str(uuid.uuid4())
        payload = json.dumps(analysis_data, ensure_ascii=False) if analysis_data is not None else None
        try:
            with self.get_conn() as conn:
                conn.execute(
                    "INSERT INTO messages (id, chat_id, role, content, type, analysis_data, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (message_id, chat_id, role, content, message_type, payload, utc_now_iso()),
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            raise StorageError(f"Could not store message for chat {chat_id}: {e}") from e
        return message_id

    # ---------------- reviews ----------------

    def upsert_reviews(self, reviews: Iterable[Dict[str, Any]]) -> int:
        """Insert or replace review rows keyed on ``id``. Returns the row count."""
        rows = [tuple(review.get(col) for col in _REVIEW_COLUMNS) for review in reviews]
        if not rows:
            return 0

        placeholders = ", ".join("?" for _ in _REVIEW_COLUMNS)
        updates = ", ".join(f"{col} = excluded.{col}" for col in _REVIEW_COLUMNS if col != "id")
        sql = (
            f"INSERT INTO reviews ({', '.join(_REVIEW_COLUMNS)}) VALUES ({placeholders}) "
            f"ON CONFLICT(id) DO UPDATE SET {updates}"
        )
        try:
            with self.get_conn() as conn:
                conn.executemany(sql, rows)
                conn.commit()
        except sqlite3.Error as e:
            logger.error("Review sync error: %s", e)
            raise StorageError(f"Review sync failed: {e}") from e
        return len(rows)

    def count_reviews(self) -> int:
        with self.get_conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM reviews").fetchone()[0]
