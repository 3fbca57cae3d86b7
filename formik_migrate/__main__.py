import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Confirm

from .core.analyzer import FormikAnalyzer
from .core.transformer import FormikConverter
from .reporting import (
    REPORT_FORMATS,
    generate_json_report,
    generate_markdown_report,
    print_console_report,
    print_conversion_summary,
    print_stats,
)
from .setting import ConfigError, Settings, load_settings


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging.

    Logs go to stderr; stdout carries the reports.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)

console = Console()


def _write_report(report: str, output: str) -> None:
    with open(output, "w", encoding="utf-8") as f:
        f.write(report)
    console.print(f"[green]✓ Report saved to {output}[/green]")


def cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Analyze command: scan the codebase and print a report."""
    target_dir = os.path.abspath(args.directory)
    analyzer = FormikAnalyzer(max_workers=settings.max_workers)
    analysis = analyzer.analyze_codebase(target_dir, settings.extensions, settings.skip_directories)

    if args.format == "json":
        report = generate_json_report(analysis)
        if args.output:
            _write_report(report, args.output)
        else:
            print(report)
    elif args.format == "markdown":
        report = generate_markdown_report(analysis)
        if args.output:
            _write_report(report, args.output)
        else:
            print(report)
    else:
        print_console_report(analysis, console)
        if args.output:
            _write_report(generate_markdown_report(analysis), args.output)

    return 0 if analysis.formik_files > 0 else 1


def cmd_convert(args: argparse.Namespace, settings: Settings) -> int:
    """Convert command: rewrite safe patterns in place."""
    target_dir = os.path.abspath(args.directory)
    converter = FormikConverter(
        max_workers=settings.max_workers,
        retain_lines=settings.retain_lines,
        backup_suffix=settings.backup_suffix,
    )

    analysis = converter.analyzer.analyze_codebase(target_dir, settings.extensions, settings.skip_directories)
    if analysis.convertible == 0:
        console.print("[yellow]⚠ No auto-convertible patterns found. All patterns need manual review.[/yellow]")
        return 0

    console.print(f"[green]✓ Found {analysis.convertible} auto-convertible patterns[/green]")
    console.print(f"[yellow]⚠ {analysis.needs_review} patterns need manual review[/yellow]")

    if not args.yes and not args.dry_run:
        backups = "backups will be created" if args.backup else "NO backups"
        if not Confirm.ask(f"Convert {analysis.convertible} patterns? ({backups})", default=False):
            console.print("[red]Conversion cancelled.[/red]")
            return 0

    summary = converter.convert_codebase(
        target_dir,
        dry_run=args.dry_run,
        backup=args.backup,
        extensions=settings.extensions,
        skip_directories=settings.skip_directories,
    )
    print_conversion_summary(summary, console)
    return 0


def cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Stats command: quick usage summary."""
    analyzer = FormikAnalyzer(max_workers=settings.max_workers)
    analysis = analyzer.analyze_codebase(
        os.path.abspath(args.directory), settings.extensions, settings.skip_directories
    )
    print_stats(analysis, console)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formik-migrate",
        description="Smart Formik to React Hook Form migration tool",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides the config file)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze Formik usage in your codebase")
    analyze.add_argument("directory", nargs="?", default=".")
    analyze.add_argument(
        "-f", "--format",
        choices=REPORT_FORMATS,
        default="console",
        help="Output format"
    )
    analyze.add_argument("-o", "--output", default=None, help="Save report to file")
    analyze.set_defaults(handler=cmd_analyze)

    convert = subparsers.add_parser(
        "convert", help="Convert Formik code to React Hook Form (safe patterns only)"
    )
    convert.add_argument("directory", nargs="?", default=".")
    convert.add_argument("-d", "--dry-run", action="store_true", help="Preview changes without modifying files")
    convert.add_argument("-b", "--backup", action="store_true", help="Create backup files before converting")
    convert.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompts")
    convert.set_defaults(handler=cmd_convert)

    stats = subparsers.add_parser("stats", help="Quick summary of Formik usage")
    stats.add_argument("directory", nargs="?", default=".")
    stats.set_defaults(handler=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for formik-migrate."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        setup_logging(args.log_level or "INFO")
        logger.error(str(e))
        return 2

    setup_logging(args.log_level or settings.log_level)
    logger.debug(f"Running {args.command} with {settings}")
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
