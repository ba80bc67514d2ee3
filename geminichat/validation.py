from typing import Any, Optional

from fastapi import HTTPException


def require_api_key(api_key: Optional[str]) -> str:
  if not api_key:
    raise HTTPException(status_code=500, detail="Missing GEMINI_API_KEY.")
  return api_key


def require_object(payload: Any) -> dict:
  if not isinstance(payload, dict):
    raise HTTPException(status_code=400, detail="Request body must be a JSON object.")
  return payload


def get_payload_text(payload: dict, *names: str, default: str = "") -> str:
  for name in names:
    value = payload.get(name)
    if value is not None:
      return str(value)
  return default


def normalize_prompt(value: str) -> str:
  cleaned = value.strip()
  if not cleaned:
    raise HTTPException(status_code=400, detail="Prompt is required.")
  return cleaned


def normalize_conversation_id(value: Optional[str]) -> str:
  cleaned = (value or "").strip()
  return cleaned or "default"
