"""
Adapter error taxonomy.

Adapters raise these (wrapping the provider exception as __cause__) so that
callers decide recovery without knowing provider-specific exception types.
"""

from __future__ import annotations


class AdapterError(Exception):
    """Base class for external-service failures."""


class TranscriptionError(AdapterError):
    """Speech-to-text call failed or returned an unusable response."""


class TextGenerationError(AdapterError):
    """Text-generation call failed or returned no content."""


class SpeechSynthesisError(AdapterError):
    """Text-to-speech call failed or returned no audio."""
