"""Deepgram API client package: async HTTP interface to Deepgram.

WHY: The CLI needs to send audio to Deepgram and get a timestamped
transcript back. This package encapsulates all Deepgram communication
behind an async client class and parses the response into the core IR.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. Response JSON is
validated with jsonschema and parsed into TranscriptionResult in
models.py.

RULES:
- All HTTP calls go through DeepgramClient (no direct httpx usage elsewhere)
- Authentication is via ``Token`` header from config or the CLI
"""

from lamarck.api.client import DeepgramAPIError, DeepgramClient, resolve_audio_source
from lamarck.api.models import AudioSource, InvalidResponseError, TranscriptionResponse

__all__ = [
    "AudioSource",
    "DeepgramAPIError",
    "DeepgramClient",
    "InvalidResponseError",
    "TranscriptionResponse",
    "resolve_audio_source",
]
