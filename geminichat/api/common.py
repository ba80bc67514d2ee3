from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..app_state import AppState
from ..chat_service import UpstreamFailure
from ..config import logger
from ..validation import require_object


def get_state(request: Request) -> AppState:
  return request.app.state.context


async def read_json_object(request: Request) -> dict:
  try:
    payload = await request.json()
  except ValueError as exc:
    raise HTTPException(status_code=400, detail="Request body must be valid JSON.") from exc
  return require_object(payload)


def upstream_error_response(failure: UpstreamFailure) -> JSONResponse:
  logger.warning("Chat request failed upstream (%s): %s", failure.status_code, failure.details)
  return JSONResponse(
    {"error": failure.error, "details": failure.details},
    status_code=failure.status_code,
  )
