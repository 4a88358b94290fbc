"""lamarck: Deepgram transcripts to SRT and single-word captions.

WHY: Deepgram returns word- and utterance-level timestamps for every
recognition channel and alternative, but video editors and players want
subtitle files. This package turns one transcription result into SRT
documents: one cue per utterance, or one cue per word for burned-in
"beast" caption styles.

HOW: Three-stage pipeline: ingest (async Deepgram client), model (core IR
dataclasses), render (pluggable formatters). Rendering is pure and never
touches the filesystem; the CLI owns all I/O.

RULES:
- All formatters consume the same TranscriptionResult IR
- Renderers return documents addressable as documents[channel][alternative]
- File naming and writing live in the CLI, never in a formatter
"""

__version__ = "0.4.2"
