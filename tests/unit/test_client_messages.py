# pylint: disable=missing-module-docstring,missing-function-docstring

import base64
import json
from datetime import datetime

import pytest

from protocol.messages import (
    Answer,
    ClientMessageType,
    InvalidChunkEncoding,
    InvalidMessage,
    TranscriptEntry,
    UnknownMessageType,
    ai_response_message,
    decode_client_message,
    error_message,
    transcription_message,
    tts_audio_message,
)


# ---------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------

def test_decode_wake_word():
    msg = decode_client_message(json.dumps({"type": "wake-word-detected"}))

    assert msg.type is ClientMessageType.WAKE_WORD_DETECTED
    assert msg.chunk is None


def test_decode_audio_stream_base64_chunk():
    payload = json.dumps({
        "type": "audio-stream",
        "chunk": base64.b64encode(b"\x1a\x45\xdf\xa3").decode(),
    })

    msg = decode_client_message(payload)

    assert msg.type is ClientMessageType.AUDIO_STREAM
    assert msg.chunk == b"\x1a\x45\xdf\xa3"


@pytest.mark.parametrize("chunk", ["not*base64!", 42, None])
def test_decode_rejects_bad_chunk(chunk: object):
    with pytest.raises(InvalidChunkEncoding):
        decode_client_message(json.dumps({"type": "audio-stream", "chunk": chunk}))


def test_decode_rejects_unknown_type():
    with pytest.raises(UnknownMessageType):
        decode_client_message(json.dumps({"type": "MIC_START"}))


@pytest.mark.parametrize("payload", ["{not json", "[]", '{"kind": "x"}', '{"type": 3}'])
def test_decode_rejects_malformed(payload: str):
    with pytest.raises(InvalidMessage):
        decode_client_message(payload)


# ---------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------

def test_transcription_message_shape():
    entry = TranscriptEntry(text="how do curses work", timestamp="2024-01-01T00:00:00.000+00:00")

    assert transcription_message(entry) == {
        "type": "transcription",
        "text": "how do curses work",
        "timestamp": "2024-01-01T00:00:00.000+00:00",
    }


def test_ai_response_message_shape():
    answer = Answer(question="q", text="a", timestamp="t")

    assert ai_response_message(answer) == {
        "type": "ai-response",
        "question": "q",
        "answer": "a",
        "timestamp": "t",
    }


def test_tts_audio_message_is_base64_with_iso_timestamp():
    msg = tts_audio_message(b"\x00\xff")

    assert msg["type"] == "tts-audio"
    assert base64.b64decode(msg["audio"]) == b"\x00\xff"
    assert datetime.fromisoformat(msg["timestamp"]).tzinfo is not None


def test_error_message_shape():
    assert error_message("Failed") == {"type": "error", "message": "Failed"}


def test_records_are_immutable():
    entry = TranscriptEntry(text="x")

    with pytest.raises(AttributeError):
        entry.text = "y"  # type: ignore[misc]
