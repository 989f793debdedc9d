"""Command-line interface for dom2md.

Reads HTML from a file or standard input and prints Markdown.

Examples
--------
Basic conversion:
    $ dom2md page.html

Read from a pipe and write to a file:
    $ curl -s https://example.com | dom2md - --out page.md

Drop page chrome and keep original whitespace:
    $ dom2md page.html --skip-noise --no-trim-space

Preview in the terminal:
    $ dom2md page.html --rich

Use environment variables for defaults:
    $ export DOM2MD_PARSER=lxml
    $ export DOM2MD_LOG_LEVEL=debug
    $ dom2md page.html
"""

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Optional

from .api import html_to_markdown
from .constants import DEFAULT_SKIP_TAGS, ENV_VAR_PREFIX, NOISE_TAGS, SUPPORTED_HTML_PARSERS
from .exceptions import Dom2MdError, InputError, OutputWriteError, ValidationError
from .logging_utils import configure_logging
from .options import ConvertOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_CONVERSION_ERROR = 1
EXIT_INPUT_ERROR = 2

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with DOM2MD_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'parser', 'log_level')

    Returns
    -------
    str or None
        Value of ``DOM2MD_<KEY>`` if set

    """
    return os.environ.get(f"{ENV_VAR_PREFIX}{key.upper()}")


def _env_flag(key: str) -> bool:
    value = get_env_var_value(key)
    return value is not None and value.strip().lower() in _TRUE_VALUES


def _option_help(name: str) -> str:
    for option_field in fields(ConvertOptions):
        if option_field.name == name:
            return option_field.metadata.get("help", "")
    return ""


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dom2md",
        description="Convert HTML documents to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to convert, or '-' for standard input")
    parser.add_argument("--out", "-o", help="Write Markdown to this file instead of standard output")
    parser.add_argument(
        "--rich",
        action="store_true",
        default=_env_flag("rich"),
        help="Render the Markdown with rich terminal formatting instead of printing it raw",
    )

    conversion = parser.add_argument_group("conversion options")
    conversion.add_argument(
        "--no-trim-space",
        dest="trim_space",
        action="store_false",
        default=not _env_flag("no_trim_space"),
        help=f"Do not {_option_help('trim_space').lower()}",
    )
    conversion.add_argument(
        "--no-escape",
        dest="escape_special",
        action="store_false",
        default=not _env_flag("no_escape"),
        help=f"Do not {_option_help('escape_special').lower()}",
    )
    conversion.add_argument(
        "--parser",
        choices=SUPPORTED_HTML_PARSERS,
        default=get_env_var_value("parser") or "html.parser",
        help=_option_help("parser"),
    )
    conversion.add_argument(
        "--skip-tag",
        dest="skip_tags",
        action="append",
        default=[],
        metavar="TAG",
        help=f"{_option_help('skip_tags')}, in addition to: {', '.join(sorted(DEFAULT_SKIP_TAGS))} (repeatable)",
    )
    conversion.add_argument(
        "--skip-noise",
        action="store_true",
        default=_env_flag("skip_noise"),
        help=f"Also drop page chrome: {', '.join(sorted(NOISE_TAGS))}",
    )
    conversion.add_argument(
        "--max-depth",
        type=int,
        default=get_env_var_value("max_depth"),
        help=_option_help("max_depth"),
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default=get_env_var_value("log_level") or "WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    logging_group.add_argument("--log-file", default=get_env_var_value("log_file"), help="Also write logs to a file")
    logging_group.add_argument(
        "--trace",
        action="store_true",
        default=_env_flag("trace"),
        help="Include timestamps and logger names in log output",
    )
    return parser


def build_options(args: argparse.Namespace) -> ConvertOptions:
    """Translate parsed arguments into :class:`ConvertOptions`."""
    skip_tags = set(DEFAULT_SKIP_TAGS) | set(args.skip_tags)
    if args.skip_noise:
        skip_tags |= NOISE_TAGS

    kwargs = {
        "trim_space": args.trim_space,
        "escape_special": args.escape_special,
        "parser": args.parser,
        "skip_tags": frozenset(skip_tags),
    }
    if args.max_depth is not None:
        try:
            kwargs["max_depth"] = int(args.max_depth)
        except ValueError as e:
            raise ValidationError(
                f"max_depth must be an integer, got {args.max_depth!r}",
                parameter_name="max_depth",
                parameter_value=args.max_depth,
                original_error=e,
            ) from e
    return ConvertOptions(**kwargs)


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    if not path.is_file():
        raise InputError(f"Input file not found: {source}", input_type="path")
    try:
        return path.read_bytes()
    except OSError as e:
        raise InputError(f"Failed to read {source}: {e}", input_type="path", original_error=e) from e


def _write_output(markdown: str, destination: Optional[str]) -> None:
    text = markdown + "\n" if markdown else ""
    try:
        if destination:
            Path(destination).write_text(text, encoding="utf-8")
        else:
            sys.stdout.write(text)
            sys.stdout.flush()
    except OSError as e:
        raise OutputWriteError(sink_name=destination or "<stdout>", original_error=e) from e


def _print_rich(markdown: str) -> int:
    """Render Markdown to the terminal with rich formatting.

    Returns
    -------
    int
        Exit code (0 for success, 1 if rich is not installed)
    """
    try:
        from rich.console import Console
        from rich.markdown import Markdown
    except ImportError:
        print("Error: Rich library not installed. Install with: pip install dom2md[rich]", file=sys.stderr)
        return EXIT_CONVERSION_ERROR

    Console().print(Markdown(markdown))
    return EXIT_SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return a process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)

    try:
        options = build_options(args)
        markup = _read_input(args.input)
        markdown = html_to_markdown(markup, options=options)
        if args.rich and not args.out:
            return _print_rich(markdown)
        _write_output(markdown, args.out)
    except (InputError, ValidationError) as e:
        logger.error("%s", e)
        return EXIT_INPUT_ERROR
    except Dom2MdError as e:
        logger.error("%s", e)
        if e.original_error is not None:
            logger.debug("Caused by %r", e.original_error)
        return EXIT_CONVERSION_ERROR

    if args.out:
        logger.info("Wrote %s", args.out)
    return EXIT_SUCCESS
