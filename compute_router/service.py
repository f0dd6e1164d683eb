"""Narrative relay: maps workflow step events to narrative events over WebSocket.

Connect with ``ws://<host>:<port>/?sessionId=<id>&modality=<modality>`` and
send step events as JSON; each mapped event is sent back on the same socket.
"""

from __future__ import annotations

import json
import sys

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from loguru import logger

from compute_router.config import Settings
from compute_router.errors import StepNotFoundError, TemplateError
from compute_router.narrative import TemplateCache, WorkflowEvent, to_narrative

SERVICE_NAME = "narrative-service"

# WebSocket close codes (RFC 6455)
POLICY_VIOLATION = 1008
INTERNAL_ERROR = 1011


def create_app(settings: Settings | None = None, cache: TemplateCache | None = None) -> FastAPI:
    """Build the relay app. The template cache lives on ``app.state`` for the app's lifetime."""
    settings = settings or Settings()
    app = FastAPI(title=SERVICE_NAME)
    app.state.settings = settings
    app.state.templates = cache if cache is not None else TemplateCache(settings.templates_dir)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": SERVICE_NAME}

    @app.websocket("/")
    async def narrative_socket(websocket: WebSocket) -> None:
        session_id = websocket.query_params.get("sessionId")
        modality = websocket.query_params.get("modality") or settings.default_modality

        await websocket.accept()
        if not session_id:
            await websocket.close(code=POLICY_VIOLATION, reason="Missing sessionId parameter")
            return

        logger.info(f"[WS] Client connected: session={session_id}, modality={modality}")

        try:
            template = app.state.templates.load(modality, settings.language)
        except TemplateError as e:
            logger.error(f"[WS] Failed to load template for {modality}: {e}")
            await websocket.close(code=INTERNAL_ERROR, reason=f"Template not found for {modality}")
            return

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                try:
                    raw = message.get("text")
                    if raw is None:
                        raw = (message.get("bytes") or b"").decode("utf-8")
                    event = WorkflowEvent.from_dict(json.loads(raw))
                    narrative = to_narrative(event, template)
                except (ValueError, StepNotFoundError) as e:
                    logger.error(f"[WS] Error processing message: session={session_id}: {e}")
                    await websocket.send_json({"error": str(e)})
                    continue
                await websocket.send_json(narrative.to_dict())
                logger.info(f"[WS] Sent narrative: session={session_id}, step={event.step}")
        except WebSocketDisconnect:
            logger.info(f"[WS] Client disconnected: session={session_id}")

    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.info(f"Narrative service listening on port {settings.port}")
    logger.info(f"WebSocket endpoint: ws://localhost:{settings.port}/?sessionId=<id>&modality=<modality>")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
