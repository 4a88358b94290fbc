"""Shared test fixtures for the lamarck test suite.

WHY: Parser, formatter and CLI tests all need the same Deepgram response
and the same IR built from it. Centralizing fixtures here avoids
duplication and keeps expected values in one place.

HOW: DEEPGRAM_RESPONSE mirrors the shape of a real pre-recorded
response with punctuation and utterances enabled (one channel, one
alternative). The multichannel fixture builds a 2 channel × 2
alternative TranscriptionResult directly, without going through JSON.

RULES:
- Times are chosen to be exact in milliseconds so expected timecodes
  are unambiguous
- Fixtures return fresh copies; tests may mutate them
"""

import copy
from typing import Any, Dict

import pytest

from lamarck.core.ir import Alternative, Channel, TranscriptionResult, Utterance, Word


DEEPGRAM_RESPONSE: Dict[str, Any] = {
    "metadata": {
        "request_id": "9b0a4c3e-5c2f-4d8a-8f8e-0c1a2b3c4d5e",
        "duration": 2.4,
        "channels": 1,
    },
    "results": {
        "channels": [
            {
                "alternatives": [
                    {
                        "transcript": "hi there life moves pretty fast",
                        "confidence": 0.98,
                        "words": [
                            {"word": "hi",     "start": 0.0,  "end": 0.3,  "confidence": 0.99, "punctuated_word": "Hi"},
                            {"word": "there",  "start": 0.3,  "end": 0.8,  "confidence": 0.97, "punctuated_word": "there."},
                            {"word": "life",   "start": 1.2,  "end": 1.5,  "confidence": 0.98, "punctuated_word": "Life"},
                            {"word": "moves",  "start": 1.5,  "end": 1.8,  "confidence": 0.96, "punctuated_word": "moves"},
                            {"word": "pretty", "start": 1.8,  "end": 2.1,  "confidence": 0.95, "punctuated_word": "pretty"},
                            {"word": "fast",   "start": 2.1,  "end": 2.4,  "confidence": 0.99, "punctuated_word": "fast."},
                        ],
                    }
                ]
            }
        ],
        "utterances": [
            {"start": 0.0, "end": 0.8, "confidence": 0.98, "channel": 0, "transcript": "Hi there.", "id": "u1"},
            {"start": 1.2, "end": 2.4, "confidence": 0.97, "channel": 0, "transcript": "Life moves pretty fast.", "id": "u2"},
        ],
    },
}


@pytest.fixture
def deepgram_response():
    """A pre-recorded Deepgram response with punctuation and utterances."""
    return copy.deepcopy(DEEPGRAM_RESPONSE)


def _alternative(tag: str, offset: float) -> Alternative:
    return Alternative(
        transcript="{} one {} two".format(tag, tag),
        words=[
            Word(text="{}-one".format(tag), start=offset, end=offset + 0.5),
            Word(text="{}-two".format(tag), start=offset + 0.5, end=offset + 1.0),
        ],
        utterances=[
            Utterance(text="{} one.".format(tag), start=offset, end=offset + 0.5),
            Utterance(text="{} two.".format(tag), start=offset + 0.5, end=offset + 1.0),
        ],
    )


@pytest.fixture
def multichannel_result():
    """Two channels with two alternatives each; alternatives overlap in time."""
    return TranscriptionResult(
        channels=[
            Channel(alternatives=[_alternative("c0a0", 0.0), _alternative("c0a1", 0.25)]),
            Channel(alternatives=[_alternative("c1a0", 1.0), _alternative("c1a1", 1.25)]),
        ]
    )
