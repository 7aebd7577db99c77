"""Guess the MIME/media type of file paths or extensions read from stdin.

No disk access is performed: the type is derived from the extension alone.
A single JSON string resolves to a single MIME type; lines or a JSON array
resolve to one ``name``/``type`` row per element.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from typing import IO, Any

from mimeguess.dispatch import dispatch
from mimeguess.errors import MimeGuessError
from mimeguess.load_config import default_mode, load_config
from mimeguess.lookup_mode import LookupMode
from mimeguess.mime_table import MimeTable
from mimeguess.read_input import iter_lines, read_json
from mimeguess.render import FORMATS, write_results
from mimeguess.span import Spanned

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
EXIT_CANCELLED = 130

EPILOG = """\
Because no disk access is performed, inputs that have no extensions, such as
directory names, will return "unknown".

examples:
  echo '"video.mkv"' | mime-guess --json
      video/x-matroska
  printf 'video.mkv\\naudio.mp3\\n' | mime-guess
      video.mkv\tvideo/x-matroska
      audio.mp3\taudio/mpeg
  echo '["mkv", "mp3"]' | mime-guess --json -e --format json
      {"name": "mkv", "type": "video/x-matroska"}
      {"name": "mp3", "type": "audio/mpeg"}
"""


def configure_logging(level: str) -> None:
    """Send log records to stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def run_guess(
    args: argparse.Namespace,
    config: dict[str, Any],
    stdin: IO[bytes],
    stdout: IO[str],
    stderr: IO[str],
    cancel: threading.Event | None = None,
) -> int:
    """Resolve pipeline input from ``stdin`` and write the result."""
    if cancel is None:
        cancel = threading.Event()
    try:
        mode = (
            LookupMode.BY_EXTENSION if args.extension else default_mode(config)
        )
        table = MimeTable.from_config(config)

        data: Any = read_json(stdin) if args.json else iter_lines(stdin)
        result = dispatch(data, mode, cancel=cancel, table=table)
    except MimeGuessError as exc:
        stderr.write(f"Error: {exc}\n")
        return 1

    if isinstance(result, Spanned):
        stdout.write(f"{result.value}\n")
        return 0

    records, errors = write_results(result, stdout, stderr, args.format)
    logger.info("Resolved %d names, %d inline errors", records, errors)
    if cancel.is_set():
        stderr.write("Interrupted.\n")
        return EXIT_CANCELLED
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    ap = argparse.ArgumentParser(
        prog="mime-guess",
        description=(
            "Guess the MIME/Media Type of an extension or path. "
            "No disk access is performed."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument(
        "-e",
        "--extension",
        action="store_true",
        help="Accept extensions as input rather than file paths",
    )
    ap.add_argument(
        "--json",
        action="store_true",
        help="Read stdin as one JSON string or array instead of one name per line",
    )
    ap.add_argument(
        "--format",
        choices=FORMATS,
        default="table",
        help="How rows are written for list input (default: table)",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--log-level",
        help="Logging level (overrides the configuration file)",
    )
    return ap


def main() -> int:
    """Run mime-guess over stdin."""
    args = build_parser().parse_args()
    try:
        config = load_config(args.config)
    except MimeGuessError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    configure_logging(args.log_level or config["logging"]["level"])

    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda *_: cancel.set())
    try:
        return run_guess(
            args, config, sys.stdin.buffer, sys.stdout, sys.stderr, cancel
        )
    finally:
        signal.signal(signal.SIGINT, previous)


if __name__ == "__main__":
    raise SystemExit(main())
