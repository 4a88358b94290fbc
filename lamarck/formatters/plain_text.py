"""Plain text transcript formatter.

WHY: Besides subtitles, users often want the bare transcript for notes,
show descriptions or search. Deepgram already returns the full text per
alternative, so no reassembly is needed.

HOW: Takes the transcript of the first alternative of the first channel
and returns it unchanged as a single output.

RULES:
- Only channel 0 / alternative 0 is written; it is the best hypothesis
  of the primary stream
- A result without channels or alternatives yields an empty file
- The output is not per-channel, so its indices are None
- Registered as "transcript" in the FORMATTERS dict
"""

from __future__ import annotations

from typing import List

from lamarck.core.ir import TranscriptionResult
from lamarck.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Formatter that writes the top transcript as plain text."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, result: TranscriptionResult) -> List[FormatterOutput]:
        content = ""
        if result.channels and result.channels[0].alternatives:
            content = result.channels[0].alternatives[0].transcript

        return [FormatterOutput(content=content, media_type=self.media_type)]
