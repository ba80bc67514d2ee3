from fastapi import APIRouter, Request

from ..text_utils import normalize_reply
from ..validation import get_payload_text
from .common import read_json_object

router = APIRouter()


@router.post("/api/normalize")
async def normalize(request: Request):
  payload = await read_json_object(request)
  return {"markdown": normalize_reply(get_payload_text(payload, "text"))}
