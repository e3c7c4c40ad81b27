# pylint: disable=missing-module-docstring,missing-function-docstring

from pathlib import Path
from typing import Sequence

import pytest
from fastapi.testclient import TestClient

from adapters.asr.base import TranscriptionAdapter
from adapters.errors import TextGenerationError
from adapters.llm.base import TextGenerationAdapter
from adapters.tts.base import SpeechSynthesisAdapter
from config import AppConfig
from games.munchkin import COMBAT_RULES
from server.app import create_app


class FixedTranscriber(TranscriptionAdapter):
    async def transcribe(self, chunks: Sequence[bytes]) -> str:
        return "how does combat work"


class DownGenerator(TextGenerationAdapter):
    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        raise TextGenerationError("offline")


class BeepSynthesizer(SpeechSynthesisAdapter):
    async def synthesize(self, text: str) -> bytes:
        return b"beep"


def make_client(public_dir: Path, threshold: int = 20) -> TestClient:
    app = create_app(
        AppConfig(public_dir=str(public_dir), dispatch_threshold=threshold),
        transcriber=FixedTranscriber(),
        generator=DownGenerator(),
        synthesizer=BeepSynthesizer(),
    )
    return TestClient(app)


# ---------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------

def test_health(tmp_path: Path):
    with make_client(tmp_path) as client:
        assert client.get("/health").json() == {"status": "ok"}


def test_index_served_from_public_dir(tmp_path: Path):
    (tmp_path / "index.html").write_text("<h1>Hexpert</h1>")
    (tmp_path / "app.js").write_text("console.log('hi')")

    with make_client(tmp_path) as client:
        index = client.get("/")
        asset = client.get("/static/app.js")

    assert index.status_code == 200
    assert "Hexpert" in index.text
    assert asset.status_code == 200


def test_index_missing_is_404(tmp_path: Path):
    with make_client(tmp_path / "nope") as client:
        assert client.get("/").status_code == 404


def test_game_info(tmp_path: Path):
    with make_client(tmp_path) as client:
        info = client.get("/game").json()

    assert info["name"] == "Steve Jackson Games' Munchkin"


def test_missing_api_key_fails_at_startup(tmp_path: Path):
    with pytest.raises(RuntimeError):
        create_app(AppConfig(public_dir=str(tmp_path), openai_api_key=None))


# ---------------------------------------------------------------------
# WebSocket
# ---------------------------------------------------------------------

def test_websocket_round_trip(tmp_path: Path):
    with make_client(tmp_path, threshold=3) as client:
        with client.websocket_connect("/ws") as ws:
            init = ws.receive_json()
            assert init["type"] == "session-init"
            assert init["dispatch_threshold"] == 3

            ws.send_json({"type": "wake-word-detected"})
            for _ in range(3):
                ws.send_bytes(b"\x00")

            transcript = ws.receive_json()
            response = ws.receive_json()
            audio = ws.receive_json()

    assert transcript["type"] == "transcription"
    assert transcript["text"] == "how does combat work"
    assert response["type"] == "ai-response"
    assert response["answer"] == COMBAT_RULES
    assert audio["type"] == "tts-audio"
    assert audio["audio"] == "YmVlcA=="
