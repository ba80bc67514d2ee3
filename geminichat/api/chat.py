from fastapi import APIRouter, HTTPException, Request

from ..chat_service import UpstreamFailure, answer_prompt, render_message
from ..validation import (
  get_payload_text,
  normalize_conversation_id,
  normalize_prompt,
  require_api_key,
)
from .common import get_state, read_json_object, upstream_error_response

router = APIRouter()


@router.post("/api/chat")
async def chat(request: Request):
  state = get_state(request)
  require_api_key(state.gemini.api_key)

  payload = await read_json_object(request)
  prompt = normalize_prompt(get_payload_text(payload, "prompt"))
  conversation_id = normalize_conversation_id(
    get_payload_text(payload, "conversation_id", "conversationId")
  )

  try:
    reply = await answer_prompt(prompt, conversation_id, state.gemini, state.history)
  except UpstreamFailure as failure:
    return upstream_error_response(failure)
  return {"conversation_id": reply.conversation_id, "answer": reply.answer, "raw": reply.raw}


@router.get("/api/chat/{conversation_id}/messages")
def get_messages(conversation_id: str, request: Request):
  messages = get_state(request).history.load(conversation_id)
  if not messages:
    raise HTTPException(status_code=404, detail="Conversation not found.")
  return {
    "conversation_id": conversation_id,
    "messages": [render_message(message) for message in messages],
  }


@router.delete("/api/chat/{conversation_id}")
def clear_conversation(conversation_id: str, request: Request):
  get_state(request).history.clear(conversation_id)
  return {"conversation_id": conversation_id, "cleared": True}
