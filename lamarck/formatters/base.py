"""Abstract base formatters and the output container.

WHY: Every output format consumes the same TranscriptionResult IR but
produces different file content. The base classes enforce a consistent
interface so the CLI can run any selection of formatters generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. CueFormatter adds the shared subtitle shape:
subclasses only decide which (start, end, text) spans become cues for one
alternative; the base numbers them, builds one Document per (channel,
alternative) and serializes each to SRT. FormatterOutput bundles the
content with the indices the CLI needs to name the file.

RULES:
- Subclasses MUST implement ``name`` and ``format()`` (CueFormatter
  subclasses implement ``spans()`` instead of ``format()``)
- ``format()`` returns a list: cue formatters return one output per
  (channel, alternative), the plain transcript returns one output total
- Formatters never build paths or write files; the caller combines the
  output stem with ``file_marker`` and ``extension``
- The TranscriptionResult is never modified
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from lamarck.core.ir import Alternative, Cue, Document, DocumentSet, TranscriptionResult
from lamarck.core.srt import render_srt
from lamarck.core.timecode import to_milliseconds

# (start seconds, end seconds, text)
Span = Tuple[float, float, str]


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/x-subrip"``.
        channel_index: Source channel, or None for whole-result outputs.
        alternative_index: Source alternative, or None for whole-result outputs.
    """

    content: str
    media_type: str
    channel_index: Optional[int] = None
    alternative_index: Optional[int] = None


def assemble_cues(spans: Iterable[Span]) -> List[Cue]:
    """Number spans into cues, validating every timestamp up front.

    Raises:
        InvalidTimestampError: If any span has a negative or non-finite
            time. Nothing is returned in that case, so a document is
            never left with a gap in its indices.
    """
    cues: List[Cue] = []
    for index, (start, end, text) in enumerate(spans, start=1):
        to_milliseconds(start)
        to_milliseconds(end)
        cues.append(Cue(index=index, start=start, end=end, text=text))
    return cues


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter (or CueFormatter for subtitles)
    3. Implement name and format() (or spans())
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    file_marker: str = ""
    extension: str = ".txt"
    media_type: str = "text/plain"

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SRT (utterances)'."""

    @abstractmethod
    def format(self, result: TranscriptionResult) -> List[FormatterOutput]:
        """Convert the TranscriptionResult into one or more output files."""


class CueFormatter(BaseFormatter):
    """Base for formatters that emit one SRT document per (channel, alternative).

    WHY: The utterance and single-word renderers share everything except
    the grouping unit. Keeping the traversal and numbering here means the
    index and ordering invariants hold for every subtitle flavour.

    RULES:
    - Channels and alternatives are visited in source order
    - Alternatives never interleave: each gets its own Document
    - Cue indices restart at 1 in every Document
    """

    extension = ".srt"
    media_type = "application/x-subrip"

    @abstractmethod
    def spans(self, alternative: Alternative) -> Iterable[Span]:
        """Yield the (start, end, text) spans that become cues, in order."""

    def render(self, result: TranscriptionResult) -> DocumentSet:
        """Build ``documents[channel_index][alternative_index]``.

        Raises:
            InvalidTimestampError: If any span carries a timestamp that
                cannot be formatted.
        """
        documents: DocumentSet = []
        for channel_index, channel in enumerate(result.channels):
            channel_documents: List[Document] = []
            for alternative_index, alternative in enumerate(channel.alternatives):
                channel_documents.append(
                    Document(
                        channel_index=channel_index,
                        alternative_index=alternative_index,
                        cues=assemble_cues(self.spans(alternative)),
                    )
                )
            documents.append(channel_documents)
        return documents

    def format(self, result: TranscriptionResult) -> List[FormatterOutput]:
        outputs: List[FormatterOutput] = []
        for channel_documents in self.render(result):
            for document in channel_documents:
                outputs.append(
                    FormatterOutput(
                        content=render_srt(document),
                        media_type=self.media_type,
                        channel_index=document.channel_index,
                        alternative_index=document.alternative_index,
                    )
                )
        return outputs
