"""Utterance SRT formatter: one cue per recognized utterance.

WHY: Deepgram's utterance segmentation already splits speech at natural
pauses into sentence-scale units. Those units make readable subtitles on
their own, so this formatter uses them as-is rather than re-segmenting
words.

HOW: For each (channel, alternative), every utterance becomes one cue
with the utterance's own start, end and text. Numbering, document
assembly and serialization come from CueFormatter.

RULES:
- Cue text is the utterance text verbatim (no wrapping, no trimming)
- Times are copied unchanged; overlapping utterances stay overlapping
- No utterances → empty document, still reported as an output
- Registered as "srt" in the FORMATTERS dict
"""

from __future__ import annotations

from typing import Iterator

from lamarck.core.ir import Alternative
from lamarck.formatters.base import CueFormatter, Span


class SRTCaptionFormatter(CueFormatter):
    """Formatter producing sentence-level SRT files from utterances."""

    @property
    def name(self) -> str:
        return "SRT Captions"

    def spans(self, alternative: Alternative) -> Iterator[Span]:
        for utterance in alternative.utterances:
            yield utterance.start, utterance.end, utterance.text
