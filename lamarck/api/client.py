"""Async HTTP client for the Deepgram pre-recorded speech-to-text API.

WHY: The CLI needs exactly one round trip: send audio (a hosted URL or
local file bytes) with recognition options, get back a timestamped
transcript. This module hides the HTTP details and input-type sniffing
behind one client class and one helper.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. DeepgramClient is an
async context manager: enter it to get an authenticated client, exit to
close the connection pool. resolve_audio_source() decides whether the
user's input is a URL or a file and checks the file's media type.

RULES:
- Always use the async context manager (async with DeepgramClient() as client:)
- Auth header is ``Authorization: Token <key>``
- Every request asks for punctuation and utterance segmentation
- Files must have an ``audio/*`` media type guessable from their name
- File bodies are streamed from disk, never read whole
- No retries: a failed call surfaces immediately as DeepgramAPIError
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from urllib.parse import urlparse

import httpx

from lamarck.api.models import AudioSource, TranscriptionResponse
from lamarck.config import DEEPGRAM_BASE_URL, load_api_key, map_language

logger = logging.getLogger(__name__)

_UPLOAD_CHUNK_SIZE = 64 * 1024


class DeepgramAPIError(Exception):
    """Raised when the Deepgram API returns an error response.

    RULES:
    - Always include status_code and message
    - message is the response body text
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Deepgram API error {status_code}: {message}")


class MimeGuessError(ValueError):
    """Raised when no media type can be guessed for an input file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Couldn't guess a mime type for the input file {path}, try renaming it "
            f"with a standard audio extension."
        )


class InvalidMimeTypeError(ValueError):
    """Raised when the input file is not an audio file."""

    def __init__(self, path: Path, mime_type: str) -> None:
        self.path = path
        self.mime_type = mime_type
        super().__init__(
            f"Media type {mime_type} of {path} is not audio. Deepgram requires an audio file."
        )


async def _iter_file(path: Path, chunk_size: int = _UPLOAD_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the bytes of ``path`` in ``chunk_size`` pieces."""
    with path.open("rb") as handle:
        while True:
            chunk = handle.read(chunk_size)
            if not chunk:
                break
            yield chunk


def _looks_like_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def resolve_audio_source(value: str) -> AudioSource:
    """Turn the user's ``--input`` into an AudioSource.

    HOW: Anything with a URL scheme and host is sent to Deepgram as a URL.
    Everything else is treated as a local path, and its media type is
    guessed from the file name.

    Raises:
        FileNotFoundError: If the path does not point to a file.
        MimeGuessError: If the media type cannot be guessed.
        InvalidMimeTypeError: If the media type is not ``audio/*``.
    """
    if _looks_like_url(value):
        return AudioSource.from_url(value)

    logger.debug("input %r is not a URL, treating it as a file path", value)
    path = Path(value)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")

    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None:
        raise MimeGuessError(path)
    if not mime_type.startswith("audio/"):
        raise InvalidMimeTypeError(path, mime_type)
    return AudioSource.from_file(path, mime_type)


class DeepgramClient:
    """Async client for Deepgram's pre-recorded transcription endpoint.

    RULES:
    - Use as: async with DeepgramClient() as client: ...
    - api_key defaults to load_api_key() from the environment / .env
    - base_url defaults to DEEPGRAM_BASE_URL from config
    - transport is for tests (httpx.MockTransport); None means real network
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_api_key()
        self._base_url = (base_url or DEEPGRAM_BASE_URL).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> DeepgramClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Token {self._api_key}"},
            timeout=httpx.Timeout(600.0, connect=30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "DeepgramClient must be used as an async context manager: "
                "async with DeepgramClient() as client: ..."
            )
        return self._client

    async def transcribe(
        self,
        source: AudioSource,
        language: str | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> TranscriptionResponse:
        """Transcribe one audio source and return the parsed response.

        HOW: POSTs to /listen with punctuation, utterances and the mapped
        language as query parameters. URLs go as a JSON body, files are streamed
        in chunks with their guessed Content-Type.

        Args:
            source: The hosted URL or local file to transcribe.
            language: CLI language code (e.g. "en_gb"); None means en-US.
            on_status: Optional callback for status updates.

        Returns:
            The validated TranscriptionResponse.

        Raises:
            DeepgramAPIError: On a non-2xx response.
            InvalidResponseError: If the body is not a transcription result.
        """
        client = self._ensure_client()
        params = {
            "punctuate": "true",
            "utterances": "true",
            "language": map_language(language),
        }

        if on_status:
            on_status("Waiting for Deepgram...")

        if source.is_url:
            logger.debug("transcribing url %s with %s", source.url, params)
            resp = await client.post("/listen", params=params, json={"url": source.url})
        else:
            logger.debug("transcribing file %s (%s) with %s", source.path, source.mime_type, params)
            resp = await client.post(
                "/listen",
                params=params,
                content=_iter_file(source.path),
                headers={
                    "Content-Type": source.mime_type,
                    "Content-Length": str(source.path.stat().st_size),
                },
            )

        if resp.status_code not in (200, 201):
            raise DeepgramAPIError(resp.status_code, resp.text)

        if on_status:
            on_status("Processing Deepgram response...")

        response = TranscriptionResponse.from_dict(resp.json())
        logger.debug(
            "request %s returned %d channel(s)",
            response.request_id,
            len(response.result.channels),
        )
        return response
