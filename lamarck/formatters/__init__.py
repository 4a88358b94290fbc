"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter for each
selected output flag. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.

RULES:
- Keys match the CLI flag destinations (``--srt`` → "srt", etc.)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lamarck.formatters.beast_captions import BeastCaptionsFormatter
from lamarck.formatters.plain_text import PlainTextFormatter
from lamarck.formatters.srt_captions import SRTCaptionFormatter

if TYPE_CHECKING:
    from lamarck.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "transcript": PlainTextFormatter,
    "srt": SRTCaptionFormatter,
    "beast_captions": BeastCaptionsFormatter,
}
