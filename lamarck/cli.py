"""Command-line interface for generating captions with Deepgram.

WHY: Users need one command that takes an audio file or URL and leaves
subtitle files next to a chosen output path. The CLI is the thin driver
around the pure formatters: it owns argument parsing, the Deepgram call,
output naming and every file write.

HOW: Uses argparse for the flags, resolves the input to an AudioSource,
checks the output directory, runs the async Deepgram request via
asyncio.run(), then runs each selected formatter and writes its outputs.
Status messages go to stderr; diagnostics go through logging.

RULES:
- --output-path defaults to transcript.srt; its extension is replaced
- The output directory must already exist (checked before any API call)
- SRT outputs are named {stem}-channel-{c}-alternative-{a}.srt, beast
  captions add -beast before the extension
- Empty documents are still written so file names stay predictable
- --transcript writes {stem}.txt, --raw writes {stem}.raw (response JSON)
- --markdown is accepted but only logs a warning
- Errors print "Error: ..." to stderr and exit 1; Ctrl-C exits 130
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from lamarck.api.client import DeepgramAPIError, DeepgramClient, resolve_audio_source
from lamarck.config import DEFAULT_OUTPUT_PATH
from lamarck.formatters import FORMATTERS
from lamarck.formatters.base import BaseFormatter, FormatterOutput

logger = logging.getLogger(__name__)


class OutputDirNotExistError(ValueError):
    """Raised when the directory of --output-path does not exist."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        super().__init__(
            "The output directory {} doesn't exist. "
            "Create it if you wish to write files there.".format(output_dir)
        )


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _selected_formats(args: argparse.Namespace) -> List[str]:
    """Return FORMATTERS keys whose flag is set, in registry order."""
    return [key for key in FORMATTERS if getattr(args, key, False)]


def output_path_for(
    output_location: Path,
    formatter: BaseFormatter,
    output: FormatterOutput,
) -> Path:
    """Build the file path for one formatter output.

    RULES:
    - Per-document outputs: {stem}-channel-{c}-alternative-{a}{marker}{ext}
    - Whole-result outputs: {stem}{marker}{ext}
    - Indices are 0-based positions in the TranscriptionResult
    """
    stem = output_location.stem
    if output.channel_index is not None:
        stem = "{}-channel-{}-alternative-{}".format(
            stem, output.channel_index, output.alternative_index
        )
    return output_location.with_name(stem + formatter.file_marker + formatter.extension)


def _check_output_dir(output_location: Path) -> None:
    output_dir = output_location.parent
    if not output_dir.is_dir():
        raise OutputDirNotExistError(output_dir)


async def _run_pipeline(args: argparse.Namespace) -> List[Path]:
    """Execute transcription and write every selected output.

    Returns:
        The paths written, in write order.
    """
    output_location = Path(args.output_path or DEFAULT_OUTPUT_PATH)
    _check_output_dir(output_location)

    if args.markdown:
        logger.warning("markdown output is not yet implemented")

    format_keys = _selected_formats(args)
    if not format_keys and not args.raw:
        _status("No output type selected (use --srt, --beast-captions, --transcript or --raw).")
        return []

    source = resolve_audio_source(args.input)

    _status("Generating captions...")
    async with DeepgramClient(api_key=args.deepgram_api_key) as client:
        response = await client.transcribe(source, language=args.lang, on_status=_status)

    saved_files: List[Path] = []

    if args.raw:
        raw_path = output_location.with_suffix(".raw")
        raw_path.write_text(json.dumps(response.raw, indent=2, ensure_ascii=False), encoding="utf-8")
        saved_files.append(raw_path)

    for key in format_keys:
        formatter = FORMATTERS[key]()
        logger.debug("running %s formatter", formatter.name)
        for output in formatter.format(response.result):
            path = output_path_for(output_location, formatter, output)
            path.write_text(output.content, encoding="utf-8")
            saved_files.append(path)

    _status("Created {} caption file(s):".format(len(saved_files)))
    for path in saved_files:
        _status("  {}".format(path))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="lamarck",
        description="Generate SRT captions and transcripts for an audio file or URL using Deepgram.",
    )

    parser.add_argument(
        "--deepgram-api-key",
        default=None,
        help="Deepgram API key (default: DEEPGRAM_API_KEY from the environment or .env).",
    )
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="A path to an audio file or a URL.",
    )
    parser.add_argument(
        "-o", "--output-path",
        default=None,
        help="File path to use for the output. The file name is preserved and "
             "its extension replaced (default: {}).".format(DEFAULT_OUTPUT_PATH),
    )
    parser.add_argument(
        "-l", "--lang",
        default=None,
        help="Language code such as en, en_gb or pt_br (default: en-US; unknown codes use en).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    output_type = parser.add_argument_group("output type")
    output_type.add_argument(
        "-r", "--raw",
        action="store_true",
        help="Write the raw Deepgram response as JSON.",
    )
    output_type.add_argument(
        "-s", "--srt",
        action="store_true",
        help="Write one SRT file per channel and alternative, one cue per utterance.",
    )
    output_type.add_argument(
        "-b", "--beast-captions",
        action="store_true",
        help="Write single-word SRT files like the burn-in captions in MrBeast videos.",
    )
    output_type.add_argument(
        "-t", "--transcript",
        action="store_true",
        help="Write the plain transcript.",
    )
    output_type.add_argument(
        "-m", "--markdown",
        action="store_true",
        help="Markdown with links to video timestamps (not yet implemented).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``lamarck`` command and ``python -m lamarck``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        asyncio.run(_run_pipeline(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, OSError, DeepgramAPIError, httpx.HTTPError) as e:
        logger.debug("caption generation failed", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
