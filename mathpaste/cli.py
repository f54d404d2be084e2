"""Command line front end.

    mathpaste normalize notes.md -o notes.canonical.md
    pbpaste | mathpaste normalize
    mathpaste normalize --check notes.md
    mathpaste serve --port 8000

The canonical document goes to stdout (or ``-o``); all logging goes to
stderr so the two can be piped separately.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from mathpaste.config import NormalizerSettings
from mathpaste.models import MathPasteError
from mathpaste.pipeline import normalize_document

EXIT_OK = 0
EXIT_NOT_CANONICAL = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool = False) -> None:
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level)


def read_input(path: Optional[str]) -> str:
    """Read the document from ``path``, or from stdin when it is None or '-'."""
    if path is None or path == "-":
        try:
            return sys.stdin.read()
        except UnicodeDecodeError as e:
            raise MathPasteError("Standard input is not valid UTF-8") from e

    source = Path(path)
    if not source.is_file():
        raise MathPasteError(f"Input file not found: {source}")
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MathPasteError(f"Input file is not valid UTF-8: {source}") from e


def write_output(content: str, path: Optional[str]) -> None:
    if path is None or path == "-":
        sys.stdout.write(content)
        return
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info(f"Wrote canonical document to {target}")


def run_normalize(args: argparse.Namespace) -> int:
    settings = NormalizerSettings.from_env()
    if args.no_shorthand:
        settings.expand_shorthand = False
    if args.no_tables:
        settings.synthesize_tables = False

    try:
        content = read_input(args.input)
    except MathPasteError as e:
        logger.error(str(e))
        return EXIT_ERROR

    result = normalize_document(content, settings)

    if args.check:
        if result.changed:
            logger.warning(
                f"{args.input or '<stdin>'} is not canonical "
                f"(tables={result.tables}, expanded_lines={result.expanded_lines})"
            )
            return EXIT_NOT_CANONICAL
        logger.info(f"{args.input or '<stdin>'} is already canonical")
        return EXIT_OK

    write_output(result.content, args.output)
    return EXIT_OK


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from mathpaste.server.app import app

    uvicorn.run(app, host=args.host, port=args.port, reload=False)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="mathpaste: normalize pasted AI output into Markdown + LaTeX.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    # Also accepted after the command; SUPPRESS keeps a top-level -v intact.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, help="Available commands"
    )

    # --- 'normalize' command ---
    parser_normalize = subparsers.add_parser(
        "normalize",
        parents=[common],
        help="Normalize a document from a file or stdin.",
    )
    parser_normalize.add_argument(
        "input", nargs="?", default=None, help="Input file (default: stdin)."
    )
    parser_normalize.add_argument(
        "-o", "--output", default=None, help="Output file (default: stdout)."
    )
    parser_normalize.add_argument(
        "--no-shorthand",
        action="store_true",
        help="Do not expand integral/root/vector/angle shorthand.",
    )
    parser_normalize.add_argument(
        "--no-tables",
        action="store_true",
        help="Do not turn comma-separated runs into Markdown tables.",
    )
    parser_normalize.add_argument(
        "--check",
        action="store_true",
        help="Write nothing; exit 1 if the input is not already canonical.",
    )
    parser_normalize.set_defaults(func=run_normalize)

    # --- 'serve' command ---
    parser_serve = subparsers.add_parser(
        "serve", parents=[common], help="Run the HTTP normalization service."
    )
    parser_serve.add_argument("--host", default="127.0.0.1")
    parser_serve.add_argument(
        "--port", type=int, default=int(os.getenv("PORT", "8000"))
    )
    parser_serve.set_defaults(func=run_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


def cli_main() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
