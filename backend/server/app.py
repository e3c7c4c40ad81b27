"""
FastAPI app factory.

Responsibilities:
- Create and configure FastAPI app
- Set up middleware and logging
- Initialize shared resources (OpenAI client, adapters, responder, pipeline)
- Register routes
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from openai import AsyncOpenAI

from adapters.asr.base import TranscriptionAdapter
from adapters.asr.openai_transcription import OpenAITranscriptionAdapter
from adapters.llm.base import TextGenerationAdapter
from adapters.llm.openai_chat import OpenAIChatAdapter
from adapters.tts.base import SpeechSynthesisAdapter
from adapters.tts.openai_speech import OpenAISpeechAdapter
from config import AppConfig
from games.munchkin import MUNCHKIN
from observability import logger
from responder.responder import Responder
from server.routes import register_routes
from session.pipeline import DispatchPipeline
from session.registry import SessionRegistry


def create_app(
    config: AppConfig | None = None,
    *,
    transcriber: TranscriptionAdapter | None = None,
    generator: TextGenerationAdapter | None = None,
    synthesizer: SpeechSynthesisAdapter | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Adapters default to the OpenAI implementations; passing any of them
    replaces the provider-backed one (tests, alternate providers). The
    OpenAI client is only required when at least one default is used.
    """
    config = config or AppConfig.load_from_env()
    logger.configure(level=config.log_level, json_lines=config.enable_json_logs)

    if transcriber is None or generator is None or synthesizer is None:
        openai_client = build_openai_client(config)
        transcriber = transcriber or OpenAITranscriptionAdapter(
            client=openai_client,
            model=config.transcription_model,
        )
        generator = generator or OpenAIChatAdapter(
            client=openai_client,
            model=config.llm_model,
        )
        synthesizer = synthesizer or OpenAISpeechAdapter(
            client=openai_client,
            model=config.tts_model,
            voice=config.tts_voice,
        )

    responder = Responder(
        profile=MUNCHKIN,
        generator=generator,
        timeout_s=config.external_call_timeout_s,
    )
    pipeline = DispatchPipeline(
        registry=SessionRegistry(),
        transcriber=transcriber,
        responder=responder,
        synthesizer=synthesizer,
        threshold=config.dispatch_threshold,
        timeout_s=config.external_call_timeout_s,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.log_event({
            "event_type": "SERVER_STARTED",
            "env": config.env,
            "dispatch_threshold": config.dispatch_threshold,
        })
        yield
        await pipeline.shutdown()
        logger.log_event({"event_type": "SERVER_STOPPED"})

    app = FastAPI(title="Hexpert Relay", lifespan=lifespan)

    app.state.config = config
    app.state.responder = responder
    app.state.pipeline = pipeline

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten later
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    register_routes(app, public_dir=config.public_dir)

    return app


def build_openai_client(config: AppConfig) -> AsyncOpenAI:
    """Build the one OpenAI client shared by every adapter in the process."""
    if not config.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable not set")
    return AsyncOpenAI(api_key=config.openai_api_key)
