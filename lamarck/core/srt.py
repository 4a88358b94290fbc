"""SRT serialization shared by every subtitle formatter.

WHY: The utterance and single-word renderers differ only in how they
group text into cues. Both must write byte-identical block structure so
players treat the files the same way.

HOW: Each cue becomes a block of index line, timerange line and text
line(s). Blocks are joined by one blank line, and the file ends with a
single newline after the last block.

RULES:
- Blocks appear in document order; indices are written as stored
- No trailing blank line after the final block
- An empty document serializes to the empty string
- Every timecode is formatted before anything is joined, so an
  InvalidTimestampError fails the whole document
"""

from __future__ import annotations

from typing import List

from lamarck.core.ir import Cue, Document
from lamarck.core.timecode import format_timerange


def render_cue(cue: Cue) -> str:
    """Serialize one cue as an SRT block without the trailing separator."""
    return "{}\n{}\n{}".format(cue.index, format_timerange(cue.start, cue.end), cue.text)


def render_srt(document: Document) -> str:
    """Serialize a whole document to SRT text.

    Args:
        document: The cues to write, already numbered.

    Returns:
        SRT file content, or ``""`` for a document with no cues.
    """
    blocks: List[str] = [render_cue(cue) for cue in document.cues]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"
