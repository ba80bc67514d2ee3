import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from .config import logger

HISTORY_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS chat_messages (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  conversation_id TEXT NOT NULL,
  role TEXT NOT NULL,
  content TEXT NOT NULL,
  created_at TEXT NOT NULL
)
"""

ROLES = {"user", "ai"}


class ChatHistoryStore:
  def __init__(self, db_path: Path):
    self._db_path = db_path
    self._lock = threading.Lock()
    self._conn: sqlite3.Connection | None = None

  def _get_conn(self) -> sqlite3.Connection:
    if self._conn is None:
      self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
      self._conn.row_factory = sqlite3.Row
      self._conn.execute(HISTORY_TABLE_SQL)
      self._conn.commit()
    return self._conn

  def append(self, conversation_id: str, role: str, content: str) -> None:
    if role not in ROLES:
      raise ValueError(f"Unknown message role: {role}")
    now = datetime.utcnow().isoformat()
    with self._lock:
      try:
        conn = self._get_conn()
        conn.execute(
          "INSERT INTO chat_messages (conversation_id, role, content, created_at) VALUES (?, ?, ?, ?)",
          (conversation_id, role, content, now),
        )
        conn.commit()
      except sqlite3.Error:
        logger.exception("Failed to store %s message for %s", role, conversation_id)
        raise

  def load(self, conversation_id: str) -> list[dict[str, str]]:
    with self._lock:
      try:
        conn = self._get_conn()
        rows = conn.execute(
          "SELECT role, content FROM chat_messages WHERE conversation_id = ? ORDER BY id",
          (conversation_id,),
        ).fetchall()
      except sqlite3.Error:
        logger.exception("Failed to load messages for %s", conversation_id)
        raise
    return [{"role": row["role"], "content": row["content"]} for row in rows]

  def clear(self, conversation_id: str) -> None:
    with self._lock:
      conn = self._get_conn()
      conn.execute("DELETE FROM chat_messages WHERE conversation_id = ?", (conversation_id,))
      conn.commit()

  def close(self) -> None:
    with self._lock:
      if self._conn is not None:
        self._conn.close()
        self._conn = None
