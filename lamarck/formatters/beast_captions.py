"""Beast captions formatter: one SRT cue per spoken word.

WHY: Burned-in caption styles popular on short-form video (the MrBeast
look) flash a single word on screen at a time, timed to when it is
spoken. Editors import an SRT where every cue is exactly one word and
style it in their NLE.

HOW: For each (channel, alternative), every recognized word becomes one
cue spanning exactly that word's start and end. The word text is the
punctuated form when Deepgram supplied one, so "there." keeps its period.

RULES:
- One word, one cue: no merging, no bucketing
- No filler cues for silence between words
- No minimum display duration; a zero-length word stays zero-length
- No words → empty document
- Output files carry the "-beast" marker before the extension
- Registered as "beast_captions" in the FORMATTERS dict
"""

from __future__ import annotations

from typing import Iterator

from lamarck.core.ir import Alternative
from lamarck.formatters.base import CueFormatter, Span


class BeastCaptionsFormatter(CueFormatter):
    """Formatter producing single-word SRT files for burn-in captions."""

    file_marker = "-beast"

    @property
    def name(self) -> str:
        return "Beast Captions"

    def spans(self, alternative: Alternative) -> Iterator[Span]:
        for word in alternative.words:
            yield word.start, word.end, word.text
