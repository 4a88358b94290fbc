"""Intermediate representation dataclasses for transcripts and subtitles.

WHY: Deepgram returns nested JSON (channels → alternatives → words), plus
a separate utterance list. Formatters need the same information in a
typed, provider-agnostic form, and they all produce the same kind of
output: numbered, timed cues grouped into one document per channel and
alternative.

HOW: Two groups of dataclasses:
  Source side: Word, Utterance, Alternative, Channel, TranscriptionResult
  Output side: Cue, Document (plus the DocumentSet alias)

RULES:
- All times are float seconds, 0 <= start <= end
- words and utterances are ordered by non-decreasing start
- Consecutive utterances may overlap; nothing may assume otherwise
- Formatters read the source side and never mutate it
- Document cue indices are 1..n in emission order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Word:
    """One recognized word.

    RULES:
    - text: punctuated form when the provider supplied one, else the raw token
    - start / end: float seconds
    """

    text: str
    start: float
    end: float


@dataclass
class Utterance:
    """A sentence- or phrase-scale span of speech with its own timing."""

    text: str
    start: float
    end: float


@dataclass
class Alternative:
    """One recognition hypothesis for a channel.

    WHY: Deepgram can return several competing hypotheses per channel. Each
    one is rendered to its own subtitle document.

    RULES:
    - transcript: full text, only used by the plain transcript output
    - utterances may be empty when segmentation was not requested or the
      provider attached it to a different alternative
    """

    transcript: str
    words: list[Word] = field(default_factory=list)
    utterances: list[Utterance] = field(default_factory=list)


@dataclass
class Channel:
    """An independently recognized audio stream."""

    alternatives: list[Alternative] = field(default_factory=list)


@dataclass
class TranscriptionResult:
    """Top-level container handed to every formatter.

    RULES:
    - channels keep provider order; list index is the channel id
    """

    channels: list[Channel] = field(default_factory=list)


@dataclass
class Cue:
    """One displayed subtitle entry."""

    index: int
    start: float
    end: float
    text: str


@dataclass
class Document:
    """An ordered run of cues for one (channel, alternative) pair.

    WHY: Each document is written to its own file, so it carries the
    indices it was rendered from. Documents never share cue lists.

    RULES:
    - cues[i].index == i + 1
    - an empty cue list is a valid document, not an error
    """

    channel_index: int
    alternative_index: int
    cues: list[Cue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cues)

    @property
    def is_empty(self) -> bool:
        return not self.cues


# documents[channel_index][alternative_index] -> Document
DocumentSet = List[List[Document]]
