"""
docset — normalize sets of near-duplicate Markdown documents.

Usage:
  docset normalize PATH [PATH ...] -o OUTDIR [options]

Exit codes:
  0  success
  1  malformed input (e.g. unterminated code fence)
  2  missing or unreadable input, invalid configuration
  3  output directory or files cannot be written
"""

import argparse
import logging
import sys
from collections.abc import Sequence

import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docset_kit import __version__
from docset_kit.config import NormalizerConfig, load_config
from docset_kit.errors import MalformedInputError, MissingInputError
from docset_kit.pipeline import (
    DocumentSetNormalizer,
    NormalizationResult,
    write_outputs,
)
from docset_kit.reporting.models import Severity
from docset_kit.reporting.serializers import EXTENSIONS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_MISSING = 2
EXIT_OUTPUT = 3

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

console = Console(stderr=True, soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docset",
        description="Merge near-duplicate Markdown documents into one canonical doc.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"docset {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING).",
    )

    subparsers = parser.add_subparsers(
        title="commands", metavar="<command>", dest="command"
    )
    subparsers.required = True

    normalize = subparsers.add_parser(
        "normalize",
        help="Build a canonical document and a divergence report.",
    )
    normalize.add_argument("paths", nargs="+", metavar="PATH", help="Input documents.")
    normalize.add_argument(
        "-o", "--output-dir", required=True, help="Directory for both output files."
    )
    normalize.add_argument("--config", help="YAML file with normalizer settings.")
    normalize.add_argument(
        "--reference",
        type=int,
        dest="reference_index",
        help="0-based index of the reference document (default: 0).",
    )
    normalize.add_argument("--window", type=int, help="Alignment look-ahead window.")
    normalize.add_argument(
        "--format",
        dest="report_format",
        choices=sorted(EXTENSIONS),
        help="Report format (default: json).",
    )
    normalize.add_argument(
        "--workers", type=int, help="Threads used to segment documents."
    )
    normalize.add_argument(
        "--quiet", action="store_true", help="Do not print the divergence summary."
    )
    # Also accepted after the command; SUPPRESS keeps a level given before it
    normalize.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING).",
    )
    normalize.set_defaults(func=run_normalize)

    return parser


def run_normalize(args: argparse.Namespace) -> int:
    try:
        base = load_config(args.config) if args.config else NormalizerConfig()
        config = base.with_overrides(
            reference_index=args.reference_index,
            window=args.window,
            report_format=args.report_format,
            workers=args.workers,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        return EXIT_MISSING

    logger.info("Normalizing %d documents into %s", len(args.paths), args.output_dir)
    normalizer = DocumentSetNormalizer(config)
    try:
        result = normalizer.normalize_paths(args.paths)
    except MissingInputError as e:
        console.print(
            f"[red]Missing input:[/red] {escape(e.label)}: {escape(e.reason)}"
        )
        return EXIT_MISSING
    except MalformedInputError as e:
        console.print(
            f"[red]Malformed input:[/red] {escape(e.label)} "
            f"line {e.line}: {escape(e.detail)}"
        )
        return EXIT_MALFORMED
    except ValueError as e:
        console.print(f"[red]Invalid input set:[/red] {escape(str(e))}")
        return EXIT_MISSING

    try:
        canonical_path, report_path = write_outputs(result, args.output_dir, config)
    except OSError as e:
        console.print(f"[red]Cannot write outputs:[/red] {escape(str(e))}")
        return EXIT_OUTPUT
    if not args.quiet:
        _print_summary(result)
    console.print(f"[green]Canonical:[/green] {canonical_path}")
    console.print(f"[green]Report:[/green] {report_path}")
    return EXIT_OK


def _print_summary(result: NormalizationResult) -> None:
    report = result.report
    if report.is_empty:
        console.print(
            f"[green]No divergences across {len(report.documents)} documents.[/green]"
        )
        return

    table = Table(title=f"Divergences vs {report.reference}", box=box.SIMPLE_HEAD)
    table.add_column("Pos", justify="right")
    table.add_column("Severity")
    table.add_column("Kind")
    table.add_column("Canonical from")
    table.add_column("Documents", justify="right")
    for record in report.records:
        color = "red" if record.severity is Severity.MAJOR else "yellow"
        table.add_row(
            str(record.position),
            f"[{color}]{record.severity.value.upper()}[/{color}]",
            record.kind.value,
            record.canonical_source,
            str(len(record.excerpts)),
        )
    console.print(table)
    if result.advisories:
        console.print(
            f"[yellow]{len(result.advisories)} ambiguous alignment(s); "
            "earliest candidate used.[/yellow]"
        )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
