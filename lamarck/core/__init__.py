"""Core data model, timecode arithmetic, and SRT serialization.

WHY: The core package is the stable heart of the renderer: the IR
dataclasses every formatter consumes, plus the timecode and SRT helpers
they share.

HOW: ir.py defines the input and output data structures, timecode.py
converts float seconds to ``HH:MM:SS,mmm``, srt.py serializes a Document.

RULES:
- Nothing in this package performs I/O
- IR dataclasses are the contract: change with care
"""
