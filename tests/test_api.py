"""Tests for the Deepgram API client and audio source resolution.

WHY: The client is the only code that talks to the network. Wrong query
parameters silently drop utterances or punctuation, and a wrong auth
header fails every run.

HOW: Requests are served by httpx.MockTransport, so Deepgram is never
called. Async methods are driven with asyncio.run from plain tests.

RULES:
- No real network access
- Each test builds its own client and transport
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from lamarck.api.client import (
    DeepgramAPIError,
    DeepgramClient,
    InvalidMimeTypeError,
    MimeGuessError,
    _iter_file,
    resolve_audio_source,
)
from lamarck.api.models import AudioSource, InvalidResponseError


def _transcribe(handler, source, **kwargs):
    async def _run():
        transport = httpx.MockTransport(handler)
        async with DeepgramClient(api_key="test-key", base_url="https://dg.test/v1", transport=transport) as client:
            return await client.transcribe(source, **kwargs)

    return asyncio.run(_run())


class TestResolveAudioSource:
    """URL vs file detection and media type checks."""

    def test_url(self):
        source = resolve_audio_source("https://static.example.com/audio/bueller.mp3")
        assert source.is_url
        assert source.url == "https://static.example.com/audio/bueller.mp3"

    def test_audio_file(self, tmp_path):
        audio = tmp_path / "clip.mp3"
        audio.write_bytes(b"ID3")
        source = resolve_audio_source(str(audio))
        assert not source.is_url
        assert source.path == audio
        assert source.mime_type == "audio/mpeg"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_audio_source(str(tmp_path / "nope.mp3"))

    def test_not_audio(self, tmp_path):
        doc = tmp_path / "notes.txt"
        doc.write_text("hello")
        with pytest.raises(InvalidMimeTypeError, match="text/plain"):
            resolve_audio_source(str(doc))

    def test_unguessable(self, tmp_path):
        blob = tmp_path / "mystery.zzunknown"
        blob.write_bytes(b"\x00")
        with pytest.raises(MimeGuessError):
            resolve_audio_source(str(blob))


class TestDeepgramClient:
    """Request shape and response handling."""

    def test_url_request(self, deepgram_response):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=deepgram_response)

        response = _transcribe(handler, AudioSource.from_url("https://example.com/a.mp3"), language="en_gb")

        request = seen["request"]
        assert request.method == "POST"
        assert request.url.path == "/v1/listen"
        assert request.url.params["punctuate"] == "true"
        assert request.url.params["utterances"] == "true"
        assert request.url.params["language"] == "en-GB"
        assert request.headers["Authorization"] == "Token test-key"
        assert json.loads(request.content) == {"url": "https://example.com/a.mp3"}
        assert len(response.result.channels[0].alternatives[0].words) == 6

    def test_file_request(self, tmp_path, deepgram_response):
        audio = tmp_path / "clip.mp3"
        audio.write_bytes(b"fake mp3 bytes")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=deepgram_response)

        _transcribe(handler, AudioSource.from_file(audio, "audio/mpeg"))

        request = seen["request"]
        assert request.content == b"fake mp3 bytes"
        assert request.headers["Content-Type"] == "audio/mpeg"
        assert request.headers["Content-Length"] == "14"
        assert request.url.params["language"] == "en-US"

    def test_large_file_streamed_in_chunks(self, tmp_path, deepgram_response):
        payload = bytes(range(256)) * 1000
        audio = tmp_path / "long.wav"
        audio.write_bytes(payload)
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=deepgram_response)

        _transcribe(handler, AudioSource.from_file(audio, "audio/wav"))

        request = seen["request"]
        assert request.content == payload
        assert request.headers["Content-Length"] == str(len(payload))
        assert "Transfer-Encoding" not in request.headers

    def test_iter_file_chunks(self, tmp_path):
        audio = tmp_path / "clip.wav"
        audio.write_bytes(b"abcdefg")

        async def _collect():
            return [chunk async for chunk in _iter_file(audio, chunk_size=3)]

        assert asyncio.run(_collect()) == [b"abc", b"def", b"g"]

    def test_unknown_language_falls_back(self, deepgram_response):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["language"] = request.url.params["language"]
            return httpx.Response(200, json=deepgram_response)

        _transcribe(handler, AudioSource.from_url("https://example.com/a.mp3"), language="klingon")
        assert seen["language"] == "en"

    def test_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text='{"err_msg":"Invalid credentials."}')

        with pytest.raises(DeepgramAPIError) as exc_info:
            _transcribe(handler, AudioSource.from_url("https://example.com/a.mp3"))
        assert exc_info.value.status_code == 401
        assert "Invalid credentials" in exc_info.value.message

    def test_malformed_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"results": {}})

        with pytest.raises(InvalidResponseError):
            _transcribe(handler, AudioSource.from_url("https://example.com/a.mp3"))

    def test_status_callback(self, deepgram_response):
        messages = []

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=deepgram_response)

        _transcribe(handler, AudioSource.from_url("https://example.com/a.mp3"), on_status=messages.append)
        assert messages == ["Waiting for Deepgram...", "Processing Deepgram response..."]

    def test_requires_context_manager(self):
        client = DeepgramClient(api_key="test-key")
        with pytest.raises(RuntimeError, match="async context manager"):
            asyncio.run(client.transcribe(AudioSource.from_url("https://example.com/a.mp3")))

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEEPGRAM_API_KEY", "env-key")
        assert DeepgramClient()._api_key == "env-key"

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)
        with pytest.raises(ValueError, match="DEEPGRAM_API_KEY"):
            DeepgramClient()
