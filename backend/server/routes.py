"""
Route registration for the relay.

Responsibilities:
- Define HTTP and WebSocket endpoints
- Wire a SessionGateway to each WebSocket lifecycle
- Pull dependencies from app.state
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Response, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from observability.logger import log_event
from session.gateway import GatewayResult, SessionGateway
from session.pipeline import DispatchPipeline


def register_routes(app: FastAPI, *, public_dir: str | Path) -> None:
    """Register all routes on the FastAPI app."""
    public = Path(public_dir)

    if public.is_dir():
        app.mount("/static", StaticFiles(directory=public), name="static")

    @app.get("/", response_model=None)
    async def index() -> Response: # pyright: ignore[reportUnusedFunction]
        page = public / "index.html"
        if not page.is_file():
            return JSONResponse({"detail": "index.html not found"}, status_code=404)
        return FileResponse(page)

    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.get("/game")
    async def game() -> dict[str, Any]: # pyright: ignore[reportUnusedFunction]
        return app.state.responder.game_info()

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket) -> None: # pyright: ignore[reportUnusedFunction]
        await ws.accept()

        pipeline: DispatchPipeline = app.state.pipeline

        async def send(msg: dict[str, Any]) -> None:
            await ws.send_text(json.dumps(msg))

        gateway = SessionGateway(pipeline=pipeline, send=send)

        try:
            result = await gateway.on_ws_connect()
            await _flush_gateway_result(ws, result)

            while True:
                msg = await ws.receive()

                if msg["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(code=msg.get("code", 1000))

                if msg.get("bytes") is not None:
                    result = await gateway.on_binary_message(msg["bytes"])
                    await _flush_gateway_result(ws, result)

                elif msg.get("text") is not None:
                    result = await gateway.on_json_message(msg["text"])
                    await _flush_gateway_result(ws, result)

        except WebSocketDisconnect:
            await gateway.on_ws_disconnect(reason="client_disconnect")

        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "WS_FATAL_ERROR",
                "session_id": gateway.session_id,
                "exception": type(exc).__name__,
                "message": str(exc),
            }, level="ERROR")
            await gateway.on_ws_disconnect(reason="server_error")


async def _flush_gateway_result(
    ws: WebSocket,
    result: GatewayResult,
) -> None:
    for msg in result.outbound_json:
        await ws.send_text(json.dumps(msg))
