"""
JSON message helpers for the client WebSocket.

Client -> Server:
    binary frame                              one audio chunk
    {"type": "audio-stream", "chunk": b64}    one audio chunk (text fallback)
    {"type": "wake-word-detected"}            advisory, no-op

Server -> Client:
    {"type": "session-init", "session_id", "chunk_ms", "dispatch_threshold"}
    {"type": "transcription", "text", "timestamp"}
    {"type": "ai-response", "question", "answer", "timestamp"}
    {"type": "tts-audio", "audio", "timestamp"}      audio is base64
    {"type": "error", "message"}

Timestamps are ISO-8601 UTC strings.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


# -------------------------
# Exceptions
# -------------------------

class ProtocolError(Exception):
    """Base class for client message errors."""


class InvalidMessage(ProtocolError):
    """Payload is not a JSON object with a string "type"."""


class UnknownMessageType(ProtocolError):
    """Well-formed message with a type the server does not handle."""


class InvalidChunkEncoding(ProtocolError):
    """audio-stream text message whose chunk is not valid base64."""


# -------------------------
# Message types
# -------------------------

class ClientMessageType(str, Enum):
    """Inbound message types."""
    AUDIO_STREAM = "audio-stream"
    WAKE_WORD_DETECTED = "wake-word-detected"


class ServerMessageType(str, Enum):
    """Outbound message types."""
    SESSION_INIT = "session-init"
    TRANSCRIPTION = "transcription"
    AI_RESPONSE = "ai-response"
    TTS_AUDIO = "tts-audio"
    ERROR = "error"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


# -------------------------
# Domain records
# -------------------------

@dataclass(frozen=True)
class TranscriptEntry:
    """Recognized text for one flushed batch."""
    text: str
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass(frozen=True)
class Answer:
    """Responder output for one TranscriptEntry."""
    question: str
    text: str
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass(frozen=True)
class ClientMessage:
    """
    Decoded inbound text message.

    chunk is only set for audio-stream messages.
    """
    type: ClientMessageType
    chunk: bytes | None = None


# -------------------------
# Decoding
# -------------------------

def decode_client_message(payload: str) -> ClientMessage:
    """
    Decode one inbound JSON text frame.

    Raises:
        InvalidMessage, UnknownMessageType, InvalidChunkEncoding
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise InvalidMessage(f"invalid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        raise InvalidMessage("message must be an object with a string 'type'")

    try:
        msg_type = ClientMessageType(data["type"])
    except ValueError as e:
        raise UnknownMessageType(data["type"]) from e

    if msg_type is ClientMessageType.AUDIO_STREAM:
        raw = data.get("chunk")
        if not isinstance(raw, str):
            raise InvalidChunkEncoding("audio-stream chunk must be a base64 string")
        try:
            chunk = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidChunkEncoding(str(e)) from e
        return ClientMessage(type=msg_type, chunk=chunk)

    return ClientMessage(type=msg_type)


# -------------------------
# Encoding
# -------------------------

def session_init_message(
    session_id: str, *, chunk_ms: int, dispatch_threshold: int
) -> dict[str, Any]:
    return {
        "type": ServerMessageType.SESSION_INIT.value,
        "session_id": session_id,
        "chunk_ms": chunk_ms,
        "dispatch_threshold": dispatch_threshold,
    }


def transcription_message(entry: TranscriptEntry) -> dict[str, Any]:
    return {
        "type": ServerMessageType.TRANSCRIPTION.value,
        "text": entry.text,
        "timestamp": entry.timestamp,
    }


def ai_response_message(answer: Answer) -> dict[str, Any]:
    return {
        "type": ServerMessageType.AI_RESPONSE.value,
        "question": answer.question,
        "answer": answer.text,
        "timestamp": answer.timestamp,
    }


def tts_audio_message(audio: bytes, *, timestamp: str | None = None) -> dict[str, Any]:
    return {
        "type": ServerMessageType.TTS_AUDIO.value,
        "audio": base64.b64encode(audio).decode("ascii"),
        "timestamp": timestamp or utc_timestamp(),
    }


def error_message(message: str) -> dict[str, Any]:
    return {
        "type": ServerMessageType.ERROR.value,
        "message": message,
    }
