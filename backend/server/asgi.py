"""
ASGI entry point.

Used by uvicorn / gunicorn: ``uvicorn server.asgi:app``.

The process manager owns host/port here, so only the relay settings are
read from the environment (after .env is loaded). The API key is never
logged; only whether one was found.
"""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI

from config import AppConfig
from observability.logger import log_event
from server.app import create_app


def build_app() -> FastAPI:
    """Load .env and the environment config, then build the app."""
    load_dotenv()
    config = AppConfig.load_from_env()
    app = create_app(config)

    log_event({
        "event_type": "ASGI_APP_BUILT",
        "env": config.env,
        "openai_key_present": bool(config.openai_api_key),
        "transcription_model": config.transcription_model,
        "llm_model": config.llm_model,
        "tts_model": config.tts_model,
        "dispatch_threshold": config.dispatch_threshold,
        "external_call_timeout_s": config.external_call_timeout_s,
        "public_dir": config.public_dir,
    })
    return app


app = build_app()
