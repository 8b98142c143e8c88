"""FastAPI GitHub webhook receiver that routes events to Slack and the pipeline."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from hookrelay.collaborators import build_collaborators
from hookrelay.config import Settings, settings
from hookrelay.errors import PayloadError, UnsupportedEventError
from hookrelay.logging_config import configure_logging
from hookrelay.router import EventRouter
from hookrelay.routing import EventDispatcher, create_default_dispatcher

logger = logging.getLogger(__name__)

dispatcher: Optional[EventDispatcher] = None


def create_dispatcher(app_settings: Settings) -> EventDispatcher:
    """Wire collaborators, router and dispatch rules from settings."""
    collaborators = build_collaborators(app_settings)
    router = EventRouter(
        event_logger=collaborators.event_logger,
        notifier=collaborators.notifier,
        pipeline_trigger=collaborators.pipeline_trigger,
        sensitive_files=app_settings.sensitive_file_set,
        always_log=app_settings.always_log_events,
    )
    return create_default_dispatcher(router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global dispatcher

    configure_logging(settings.log_level)
    dispatcher = create_dispatcher(settings)
    logger.info(f"Initialized event router with events: {dispatcher.registered_events}")
    yield
    dispatcher = None


app = FastAPI(lifespan=lifespan)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "dev_mode": settings.dev_mode,
        "registered_events": dispatcher.registered_events if dispatcher else [],
    }


@app.post("/webhook")
async def handle_webhook(request: Request, x_github_event: str = Header(...)):
    """Handle a GitHub webhook and route it through the event router."""
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Event router not initialized")

    if x_github_event == "ping":
        return {"status": "pong"}

    try:
        payload = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError alike
        logger.warning(f"Rejected {x_github_event} body: not valid UTF-8 JSON")
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")

    try:
        event = await dispatcher.dispatch(x_github_event, payload)
    except UnsupportedEventError:
        logger.info(f"No route configured for event: {x_github_event}")
        return JSONResponse(
            status_code=202, content={"status": "ignored", "event": x_github_event}
        )
    except PayloadError as e:
        logger.warning(f"Rejected {x_github_event} payload: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error handling {x_github_event} event: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to handle {x_github_event} event")

    return {
        "status": "processed",
        "event": x_github_event,
        "action": getattr(event, "action", None),
        "repository": event.repository,
    }


if __name__ == "__main__":
    uvicorn.run("hookrelay.main:app", port=9000, reload=True)
