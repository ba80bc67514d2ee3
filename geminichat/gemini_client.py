from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .config import logger


@dataclass(frozen=True)
class GenerateResult:
  status_code: int
  text: Optional[str] = None
  details: str = ""

  @property
  def ok(self) -> bool:
    return self.status_code < 400


def build_generate_url(base_url: str, model: str) -> str:
  cleaned = base_url.rstrip("/")
  if not cleaned.endswith("/v1beta"):
    cleaned = f"{cleaned}/v1beta"
  return f"{cleaned}/models/{model}:generateContent"


def build_generate_payload(prompt: str) -> dict:
  return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_reply_text(data: Any) -> Optional[str]:
  try:
    text = data["candidates"][0]["content"]["parts"][0]["text"]
  except (KeyError, IndexError, TypeError):
    return None
  if not isinstance(text, str) or not text:
    return None
  return text


class GeminiClient:
  def __init__(
    self,
    api_key: Optional[str],
    base_url: str,
    model: str,
    timeout: float = 60.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    self.api_key = api_key
    self._url = build_generate_url(base_url, model)
    self._timeout = httpx.Timeout(timeout)
    self._transport = transport

  async def generate(self, prompt: str) -> GenerateResult:
    headers = {"Content-Type": "application/json"}
    params = {"key": self.api_key or ""}
    async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
      response = await client.post(
        self._url, headers=headers, params=params, json=build_generate_payload(prompt)
      )
    if response.status_code >= 400:
      details = response.text
      logger.warning("Upstream error %s: %s", response.status_code, details)
      return GenerateResult(status_code=response.status_code, details=details)
    try:
      data = response.json()
    except ValueError:
      logger.warning("Upstream returned a non-JSON body")
      data = None
    return GenerateResult(status_code=response.status_code, text=extract_reply_text(data))
