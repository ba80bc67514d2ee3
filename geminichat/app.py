from typing import Optional

from fastapi import FastAPI

from .api.chat import router as chat_router
from .api.normalize import router as normalize_router
from .app_state import AppState, build_app_state


def create_app(state: Optional[AppState] = None) -> FastAPI:
  app = FastAPI(title="Gemini Chat API")
  app.state.context = state or build_app_state()

  app.include_router(chat_router)
  app.include_router(normalize_router)

  @app.on_event("shutdown")
  def _shutdown() -> None:
    app.state.context.history.close()

  return app
