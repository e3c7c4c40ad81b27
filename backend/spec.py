"""
SPEC-AS-CONSTANTS
-----------------
Single source of truth for behavioral constants of the relay.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- Deployment-tunable values get their defaults from here (see config.py).
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Audio capture (browser MediaRecorder timeslice)
# =============================================================================

# Client slices the microphone stream into chunks of this duration.
AUDIO_CHUNK_MS: Final[int] = 100

# Chunks are opaque; this only names the container the browser produces.
AUDIO_CHUNK_CONTAINER_SUFFIX: Final[str] = ".webm"

# =============================================================================
# Buffering & dispatch
# =============================================================================

# Buffer length (in chunks) that triggers a flush + transcription round.
# 20 x 100ms ~= 2 seconds of speech.
DISPATCH_THRESHOLD_CHUNKS: Final[int] = 20

# Upper bound on a single external call (transcription, generation, synthesis).
# Expiry releases the session's busy flag like any other failure.
EXTERNAL_CALL_TIMEOUT_S: Final[float] = 30.0

# =============================================================================
# Text generation
# =============================================================================

LLM_MAX_TOKENS: Final[int] = 300
LLM_TEMPERATURE: Final[float] = 0.7

# =============================================================================
# Provider defaults
# =============================================================================

DEFAULT_TRANSCRIPTION_MODEL: Final[str] = "whisper-1"
DEFAULT_LLM_MODEL: Final[str] = "gpt-3.5-turbo"
DEFAULT_TTS_MODEL: Final[str] = "tts-1"
DEFAULT_TTS_VOICE: Final[str] = "alloy"

# =============================================================================
# Server
# =============================================================================

DEFAULT_PORT: Final[int] = 3000
DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PUBLIC_DIR: Final[str] = "public"

# =============================================================================
# User-facing messages
# =============================================================================

TRANSCRIPTION_FAILED_MESSAGE: Final[str] = "Failed to process audio"


# =============================================================================
# Helper Functions
# =============================================================================

def chunks_to_seconds(num_chunks: int) -> float:
    """
    Approximate audio duration covered by a number of chunks.

    Non-positive input returns 0.0.
    """
    if num_chunks <= 0:
        return 0.0
    return num_chunks * AUDIO_CHUNK_MS / 1000.0
