"""
Session gateway.

Responsibilities:
- One gateway per WebSocket connection
- Owns the connection's session id and lifecycle calls into the pipeline
- Routes inbound binary frames -> pipeline.on_chunk_received
- Routes inbound JSON control messages -> pipeline
- Logs malformed input and drops it

NOT responsible for:
- Buffering or dispatch decisions
- Adapter calls
- Socket I/O (routes.py owns the WebSocket)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from observability.logger import log_event
from protocol.messages import (
    ClientMessageType,
    ProtocolError,
    decode_client_message,
    session_init_message,
)
from session.pipeline import DispatchPipeline
from session.voice_session import OutboundSink
from spec import AUDIO_CHUNK_MS


def _new_session_id() -> str:
    return f"sess_{uuid4().hex[:12]}"


# ------------------------------------------------------------------
# Gateway result
# ------------------------------------------------------------------

@dataclass(frozen=True)
class GatewayResult:
    """
    Synchronous replies for gateway boundary methods.

    Asynchronous results (transcripts, answers, audio) are delivered
    through the session's outbound sink instead.
    """
    outbound_json: tuple[dict[str, Any], ...] = ()


# ------------------------------------------------------------------
# SessionGateway
# ------------------------------------------------------------------

class SessionGateway:
    """
    One gateway == one client connection == one session.
    """

    def __init__(
        self,
        *,
        pipeline: DispatchPipeline,
        send: OutboundSink,
        session_id: str | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._send = send
        self.session_id: str = session_id or _new_session_id()
        self._connected = False

    async def on_ws_connect(self) -> GatewayResult:
        """Called once the WebSocket is accepted."""
        self._pipeline.on_session_start(self.session_id, self._send)
        self._connected = True

        init_msg = session_init_message(
            self.session_id,
            chunk_ms=AUDIO_CHUNK_MS,
            dispatch_threshold=self._pipeline.threshold,
        )
        return GatewayResult(outbound_json=(init_msg,))

    async def on_ws_disconnect(self, reason: str | None = None) -> None:
        """Called when the WebSocket closes for any reason. Idempotent."""
        if not self._connected:
            log_event({
                "event_type": "WS_DISCONNECT_WITHOUT_SESSION",
                "session_id": self.session_id,
                "reason": reason,
            }, level="DEBUG")
            return

        self._connected = False
        log_event({
            "event_type": "WS_DISCONNECTED",
            "session_id": self.session_id,
            "reason": reason,
        })
        await self._pipeline.on_session_end(self.session_id)

    async def on_binary_message(self, payload: bytes) -> GatewayResult:
        """One binary frame == one audio-stream chunk."""
        self._pipeline.on_chunk_received(self.session_id, payload)
        return GatewayResult()

    async def on_json_message(self, payload: str) -> GatewayResult:
        """Route an inbound JSON control message."""
        try:
            msg = decode_client_message(payload)
        except ProtocolError as e:
            log_event({
                "event_type": "CLIENT_MESSAGE_REJECTED",
                "session_id": self.session_id,
                "error_type": type(e).__name__,
                "error": str(e),
                "payload_preview": payload[:100],
            }, level="WARNING")
            return GatewayResult()

        if msg.type is ClientMessageType.AUDIO_STREAM:
            self._pipeline.on_chunk_received(self.session_id, msg.chunk)
        elif msg.type is ClientMessageType.WAKE_WORD_DETECTED:
            self._pipeline.on_wake_word(self.session_id)

        return GatewayResult()
