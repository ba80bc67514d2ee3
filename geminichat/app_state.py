from dataclasses import dataclass
from typing import Optional

import httpx

from .chat_state import ChatHistoryStore
from .config import (
  CHAT_HISTORY_DB_PATH,
  GEMINI_API_KEY,
  GEMINI_BASE_URL,
  GEMINI_MODEL,
  GEMINI_TIMEOUT_SECONDS,
)
from .gemini_client import GeminiClient


@dataclass(frozen=True)
class AppState:
  history: ChatHistoryStore
  gemini: GeminiClient


def build_app_state(
  api_key: Optional[str] = GEMINI_API_KEY,
  transport: Optional[httpx.AsyncBaseTransport] = None,
  db_path=CHAT_HISTORY_DB_PATH,
) -> AppState:
  return AppState(
    history=ChatHistoryStore(db_path),
    gemini=GeminiClient(
      api_key,
      GEMINI_BASE_URL,
      GEMINI_MODEL,
      timeout=GEMINI_TIMEOUT_SECONDS,
      transport=transport,
    ),
  )
