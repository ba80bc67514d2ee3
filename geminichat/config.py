import logging
import os
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("geminichat")

GEMINI_BASE_URL = os.getenv(
  "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
).rstrip("/")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash").strip()
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT", "60") or "60")
CHAT_HISTORY_DB_PATH = Path(os.getenv("CHAT_HISTORY_DB", "./chat_history.sqlite")).resolve()

NORMALIZE_REPLIES = os.getenv("NORMALIZE_REPLIES", "true").strip().lower() in {
  "1",
  "true",
  "yes",
  "on",
}

DEFAULT_FALLBACK_REPLY = "Sorry, I couldn't generate a response."
FALLBACK_REPLY = os.getenv("FALLBACK_REPLY", DEFAULT_FALLBACK_REPLY).strip() or DEFAULT_FALLBACK_REPLY
