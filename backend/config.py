"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No pipeline logic
- No protocol constants (see spec.py)
- No runtime mutation
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from spec import (
    DEFAULT_HOST,
    DEFAULT_LLM_MODEL,
    DEFAULT_PORT,
    DEFAULT_PUBLIC_DIR,
    DEFAULT_TRANSCRIPTION_MODEL,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_VOICE,
    DISPATCH_THRESHOLD_CHUNKS,
    EXTERNAL_CALL_TIMEOUT_S,
)


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed downward to the
    app factory, which wires it into the pipeline and adapters.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = "dev"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # OpenAI (transcription, generation, synthesis)
    # ------------------------------------------------------------------

    openai_api_key: str | None = None
    transcription_model: str = DEFAULT_TRANSCRIPTION_MODEL
    llm_model: str = DEFAULT_LLM_MODEL
    tts_model: str = DEFAULT_TTS_MODEL
    tts_voice: str = DEFAULT_TTS_VOICE

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    dispatch_threshold: int = DISPATCH_THRESHOLD_CHUNKS
    external_call_timeout_s: float = EXTERNAL_CALL_TIMEOUT_S

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    public_dir: str = DEFAULT_PUBLIC_DIR

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    def __post_init__(self) -> None:
        if self.dispatch_threshold < 1:
            raise ValueError("dispatch_threshold must be >= 1")
        if not math.isfinite(self.external_call_timeout_s) or self.external_call_timeout_s <= 0:
            raise ValueError("external_call_timeout_s must be a finite number > 0")
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if a numeric variable cannot be parsed or is out of range.
        """
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            openai_api_key=os.environ.get("OPENAI_API_KEY"),
            transcription_model=os.environ.get(
                "OPENAI_WHISPER_MODEL", DEFAULT_TRANSCRIPTION_MODEL
            ),
            llm_model=os.environ.get("OPENAI_GPT_MODEL", DEFAULT_LLM_MODEL),
            tts_model=os.environ.get("OPENAI_TTS_MODEL", DEFAULT_TTS_MODEL),
            tts_voice=os.environ.get("OPENAI_TTS_VOICE", DEFAULT_TTS_VOICE),

            dispatch_threshold=int(
                os.environ.get("DISPATCH_THRESHOLD_CHUNKS", DISPATCH_THRESHOLD_CHUNKS)
            ),
            external_call_timeout_s=float(
                os.environ.get("EXTERNAL_CALL_TIMEOUT_S", EXTERNAL_CALL_TIMEOUT_S)
            ),

            host=os.environ.get("HOST", DEFAULT_HOST),
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            public_dir=os.environ.get("PUBLIC_DIR", DEFAULT_PUBLIC_DIR),

            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
        )
