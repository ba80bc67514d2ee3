from dataclasses import dataclass

import httpx

from .chat_state import ChatHistoryStore
from .config import FALLBACK_REPLY, NORMALIZE_REPLIES, logger
from .gemini_client import GeminiClient
from .text_utils import normalize_reply
from .validation import normalize_conversation_id


@dataclass(frozen=True)
class ChatReply:
  conversation_id: str
  answer: str
  raw: str


class UpstreamFailure(Exception):
  def __init__(self, status_code: int, error: str, details: str):
    super().__init__(f"{error}: {details}")
    self.status_code = status_code
    self.error = error
    self.details = details


def format_answer(raw: str) -> str:
  if not NORMALIZE_REPLIES:
    return raw
  return normalize_reply(raw)


def render_message(message: dict) -> dict:
  if message.get("role") != "ai":
    return dict(message)
  return {**message, "content": format_answer(str(message.get("content") or ""))}


async def answer_prompt(
  prompt: str,
  conversation_id: str,
  client: GeminiClient,
  history: ChatHistoryStore,
) -> ChatReply:
  conversation_id = normalize_conversation_id(conversation_id)
  history.append(conversation_id, "user", prompt)
  try:
    result = await client.generate(prompt)
  except httpx.HTTPError as exc:
    logger.warning("Gemini request failed: %s", exc)
    raise UpstreamFailure(502, "Upstream request failed", str(exc)) from exc

  if not result.ok:
    raise UpstreamFailure(result.status_code, "Upstream error", result.details)

  raw = result.text or FALLBACK_REPLY
  history.append(conversation_id, "ai", raw)
  return ChatReply(conversation_id=conversation_id, answer=format_answer(raw), raw=raw)
