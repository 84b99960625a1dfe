#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for gdoc2md.

Reads clipboard HTML from a file or stdin, optionally with its slice clip
metadata, and writes Markdown to stdout or a file.

Environment Variable Support
----------------------------
Conversion options take defaults from ``GDOC2MD_<OPTION_NAME>`` environment
variables, e.g. ``GDOC2MD_SUGGESTIONS=accept``. ``GDOC2MD_RICH=true`` turns
on rich output. Precedence, highest first: command-line flag, environment
variable, configuration file, built-in default.

Examples
--------
Basic conversion::

    $ gdoc2md clipboard.html

Accept all suggested edits and use fenced code blocks::

    $ gdoc2md clipboard.html --metadata slice_clip.json --suggestions accept --code-blocks fenced

Read from stdin and write to a file::

    $ cat clipboard.html | gdoc2md - --out notes.md

"""

import argparse
import logging
import sys
from dataclasses import fields
from pathlib import Path

from gdoc2md.api import to_markdown
from gdoc2md.cli.builder import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS, STDIN_MARKER, create_parser
from gdoc2md.cli.config import load_config_with_priority
from gdoc2md.exceptions import Gdoc2MdError
from gdoc2md.logging_utils import configure_logging
from gdoc2md.options.conversion import ConversionOptions

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from --trace, --verbose and --log-level."""
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_text(path: str) -> str:
    if path == STDIN_MARKER:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _resolve_option_values(parsed_args: argparse.Namespace, config: dict) -> dict:
    """Merge configuration values under the flags and environment defaults.

    Flags left unset (None) fall back to the configuration file. Configuration
    keys that name renderer options are passed through unchanged.
    """
    values = dict(config)
    for field in fields(ConversionOptions):
        value = getattr(parsed_args, field.name)
        if value is not None:
            values[field.name] = value
    return values


def _print_rich(markdown: str) -> None:
    from rich.console import Console
    from rich.markdown import Markdown

    Console().print(Markdown(markdown))


def main(args: list[str] | None = None) -> int:
    """Run the gdoc2md command and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        config = load_config_with_priority(parsed_args.config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        html = _read_text(parsed_args.input)
        metadata = _read_text(parsed_args.metadata) if parsed_args.metadata else None
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        markdown = to_markdown(html, metadata, **_resolve_option_values(parsed_args, config))
    except Gdoc2MdError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(markdown, encoding="utf-8")
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info(f"Wrote {parsed_args.out}")
    elif parsed_args.rich:
        _print_rich(markdown)
    else:
        sys.stdout.write(markdown)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
