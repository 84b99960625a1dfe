#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Argument parser construction for the gdoc2md CLI.

Conversion options are generated from the ``ConversionOptions`` dataclass
fields: each field becomes a ``--field-name`` flag whose help text and
choices come from the field metadata.
"""

import argparse
from dataclasses import fields
from importlib.metadata import PackageNotFoundError, version

from gdoc2md.cli.actions import EnvironmentAwareAction, EnvironmentAwareBooleanAction
from gdoc2md.options.conversion import ConversionOptions

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_FILE_ERROR = 3

STDIN_MARKER = "-"


def get_version() -> str:
    """Return the installed gdoc2md version."""
    try:
        return version("gdoc2md")
    except PackageNotFoundError:
        from gdoc2md import __version__

        return __version__


def add_conversion_arguments(parser: argparse.ArgumentParser) -> None:
    """Add one flag per ``ConversionOptions`` field.

    Flags default to None so that the caller can tell an unset flag apart
    from one set to the built-in default. A ``GDOC2MD_<FIELD>`` environment
    variable replaces that None.
    """
    group = parser.add_argument_group("conversion options")
    for field in fields(ConversionOptions):
        metadata = field.metadata
        group.add_argument(
            f"--{field.name.replace('_', '-')}",
            dest=field.name,
            action=EnvironmentAwareAction,
            choices=metadata.get("choices"),
            default=None,
            help=f"{metadata.get('help', '')} (default: {field.default})",
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``gdoc2md`` command."""
    parser = argparse.ArgumentParser(
        prog="gdoc2md",
        description="Convert Google Docs clipboard HTML (plus optional slice clip metadata) to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gdoc2md clipboard.html
  gdoc2md clipboard.html --metadata slice_clip.json --suggestions accept
  xclip -o -selection clipboard -t text/html | gdoc2md - --out notes.md
  gdoc2md clipboard.html --code-blocks fenced --heading-ids html --rich

Option defaults may also be set with GDOC2MD_CODE_BLOCKS, GDOC2MD_HEADING_IDS
and GDOC2MD_SUGGESTIONS, or in .gdoc2md.toml / .gdoc2md.yaml / .gdoc2md.json
or [tool.gdoc2md] in pyproject.toml.
        """,
    )

    parser.add_argument(
        "input", nargs="?", default=STDIN_MARKER, help="Clipboard HTML file (use '-' or omit for stdin)"
    )
    parser.add_argument("--metadata", "-m", metavar="FILE", help="Slice clip JSON file that accompanies the HTML")
    parser.add_argument("--out", "-o", metavar="FILE", help="Output file path (default: print to stdout)")
    parser.add_argument(
        "--rich",
        action=EnvironmentAwareBooleanAction,
        help="Preview the Markdown in the terminal with rich formatting",
    )
    parser.add_argument("--config", metavar="FILE", help="Load option defaults from this configuration file")

    add_conversion_arguments(parser)

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names in log output",
    )
    parser.add_argument("--version", "-V", action="version", version=f"gdoc2md {get_version()}")

    return parser
