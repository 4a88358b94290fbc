"""Deepgram pre-recorded API request and response models.

WHY: Deepgram's /listen endpoint returns deeply nested JSON, with
utterances reported separately from the per-channel word lists. Parsing
it once into the core IR keeps provider quirks out of the formatters.

HOW: The raw response is first checked against RESPONSE_SCHEMA with
jsonschema, so a structurally wrong payload fails with one clear error
instead of a KeyError deep in the parser. TranscriptionResponse.from_dict
then builds the TranscriptionResult and keeps the raw dict for the
``--raw`` debug dump. AudioSource describes what is sent to Deepgram.

RULES:
- Word.text is ``punctuated_word`` when present, else ``word``
- results.utterances are attached to alternative 0 of their ``channel``
  (Deepgram derives them from the top hypothesis)
- An ``utterances`` array inside an alternative takes precedence
- Timing values are passed through untouched; formatters validate them
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from lamarck.core.ir import Alternative, Channel, TranscriptionResult, Utterance, Word

_WORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["word", "start", "end"],
    "properties": {
        "word": {"type": "string"},
        "punctuated_word": {"type": "string"},
        "start": {"type": "number"},
        "end": {"type": "number"},
        "confidence": {"type": "number"},
    },
}

_UTTERANCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["transcript", "start", "end"],
    "properties": {
        "transcript": {"type": "string"},
        "start": {"type": "number"},
        "end": {"type": "number"},
        "channel": {"type": "integer", "minimum": 0},
    },
}

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["results"],
    "properties": {
        "metadata": {"type": "object"},
        "results": {
            "type": "object",
            "required": ["channels"],
            "properties": {
                "channels": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["alternatives"],
                        "properties": {
                            "alternatives": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "required": ["transcript"],
                                    "properties": {
                                        "transcript": {"type": "string"},
                                        "words": {"type": "array", "items": _WORD_SCHEMA},
                                        "utterances": {"type": "array", "items": _UTTERANCE_SCHEMA},
                                    },
                                },
                            },
                        },
                    },
                },
                "utterances": {"type": "array", "items": _UTTERANCE_SCHEMA},
            },
        },
    },
}


class InvalidResponseError(ValueError):
    """Raised when a Deepgram response does not have the expected shape."""


def validate_response(data: Any) -> None:
    """Check a raw response against RESPONSE_SCHEMA.

    Raises:
        InvalidResponseError: With the failing JSON path in the message.
    """
    try:
        jsonschema.validate(instance=data, schema=RESPONSE_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise InvalidResponseError(
            "Unexpected Deepgram response at {}: {}".format(location, exc.message)
        ) from exc


def _parse_word(data: dict) -> Word:
    return Word(
        text=data.get("punctuated_word") or data["word"],
        start=data["start"],
        end=data["end"],
    )


def _parse_utterance(data: dict) -> Utterance:
    return Utterance(text=data["transcript"], start=data["start"], end=data["end"])


@dataclass
class TranscriptionResponse:
    """Parsed response from POST /v1/listen.

    RULES:
    - result is the provider-agnostic IR handed to formatters
    - raw is the untouched JSON, only used for debug dumps
    - request_id comes from metadata and may be None
    """

    result: TranscriptionResult
    raw: Dict[str, Any]
    request_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptionResponse:
        """Validate and parse a raw Deepgram response dict.

        Raises:
            InvalidResponseError: If the JSON is structurally invalid or an
                utterance names a channel that does not exist.
        """
        validate_response(data)
        results = data["results"]

        channels: List[Channel] = []
        for channel_data in results["channels"]:
            alternatives = [
                Alternative(
                    transcript=alt["transcript"],
                    words=[_parse_word(w) for w in alt.get("words", [])],
                    utterances=[_parse_utterance(u) for u in alt.get("utterances", [])],
                )
                for alt in channel_data["alternatives"]
            ]
            channels.append(Channel(alternatives=alternatives))

        for utterance_data in results.get("utterances", []):
            channel_index = utterance_data.get("channel", 0)
            if channel_index >= len(channels):
                raise InvalidResponseError(
                    "Utterance refers to channel {} but the response has {} channel(s)".format(
                        channel_index, len(channels)
                    )
                )
            alternatives = channels[channel_index].alternatives
            if not alternatives:
                continue
            if "utterances" in results["channels"][channel_index]["alternatives"][0]:
                continue
            alternatives[0].utterances.append(_parse_utterance(utterance_data))

        return cls(
            result=TranscriptionResult(channels=channels),
            raw=data,
            request_id=data.get("metadata", {}).get("request_id"),
        )


@dataclass
class AudioSource:
    """What gets sent to Deepgram: a hosted URL or a local audio file.

    RULES:
    - Exactly one of url / path is set
    - mime_type is required for files and unused for URLs
    """

    url: Optional[str] = None
    path: Optional[Path] = None
    mime_type: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> AudioSource:
        return cls(url=url)

    @classmethod
    def from_file(cls, path: Path, mime_type: str) -> AudioSource:
        return cls(path=Path(path), mime_type=mime_type)

    @property
    def is_url(self) -> bool:
        return self.url is not None
