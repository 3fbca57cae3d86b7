"""Rich console rendering for analysis and conversion results."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.analyzer import CodebaseAnalysis, Effort
from ..core.transformer import ConversionSummary
from .formatting import format_hours, pattern_breakdown, short_path

TOP_FILES = 5
MAX_WARNINGS = 10

_EFFORT_STYLE = {
    Effort.LOW: "[green]✓[/green]",
    Effort.MEDIUM: "[yellow]◐[/yellow]",
    Effort.HIGH: "[red]●[/red]",
}


def _complexity_bar(analysis: CodebaseAnalysis) -> str:
    total = sum(analysis.complexity.values())
    if total == 0:
        return ""
    bar = ""
    for tier, style in (("simple", "green"), ("medium", "yellow"), ("complex", "red")):
        tenths = int(analysis.complexity[tier] * 100 / total + 0.5) // 10
        bar += f"[{style}]{'■' * tenths}[/{style}]"
    return bar


def print_console_report(analysis: CodebaseAnalysis, console: Optional[Console] = None) -> None:
    """Print the full analysis report.

    Args:
        analysis: Codebase analysis; not modified
        console: Target console (defaults to stdout)
    """
    console = console or Console()
    console.print()
    console.rule("[bold cyan]Formik → React Hook Form Migration Analysis[/bold cyan]")
    console.print()

    summary = Table(title="Summary")
    summary.add_column("Metric", style="bold")
    summary.add_column("Count", justify="right")
    summary.add_row("Total Files Scanned", str(analysis.total_files))
    summary.add_row("[yellow]Files Using Formik[/yellow]", f"[bold yellow]{analysis.formik_files}[/bold yellow]")
    summary.add_row("[green]✓ Auto-Convertible[/green]", f"[bold green]{analysis.convertible}[/bold green]")
    summary.add_row("[red]⚠ Manual Review Needed[/red]", f"[bold red]{analysis.needs_review}[/bold red]")
    if analysis.failed_files:
        summary.add_row("[red]Files That Failed Analysis[/red]", str(analysis.failed_files))
    console.print(summary)

    breakdown = Table(title="Pattern Breakdown")
    breakdown.add_column("Formik Pattern")
    breakdown.add_column("Count", justify="right")
    breakdown.add_column("Complexity")
    labels = {
        "useFormik": "useFormik() hook",
        "Formik": "<Formik> component",
        "Field": "<Field> components",
        "FieldArray": "<FieldArray>",
        "other": "Other patterns",
    }
    for index, (kind, count) in enumerate(pattern_breakdown(analysis).items()):
        breakdown.add_row(labels[kind], str(count), _complexity_bar(analysis) if index == 0 else "")
    console.print(breakdown)

    console.print("[bold]Complexity Distribution[/bold]")
    console.print(f"  [green]●[/green] Simple:  {analysis.complexity['simple']} (auto-convertible)")
    console.print(f"  [yellow]●[/yellow] Medium:  {analysis.complexity['medium']} (needs minor adjustments)")
    console.print(f"  [red]●[/red] Complex: {analysis.complexity['complex']} (manual review required)")
    console.print()

    remaining = analysis.estimated_hours - analysis.estimated_savings
    console.print("[bold]Time Estimates[/bold]")
    console.print(f"  Manual migration:     [bold red]{format_hours(analysis.estimated_hours)}[/bold red]")
    console.print(f"  With formik-migrate:  [bold green]{format_hours(remaining)}[/bold green]")
    console.print(f"  Time saved:           [bold green]{format_hours(analysis.estimated_savings)}[/bold green]")
    console.print()

    if analysis.files:
        # sorted() copies; the analysis keeps its own order
        top = sorted(analysis.files, key=lambda f: len(f.patterns), reverse=True)[:TOP_FILES]
        files = Table(title="Files with Most Formik Usage")
        files.add_column("#", justify="right")
        files.add_column("File")
        files.add_column("Patterns", justify="right")
        files.add_column("Effort")
        for index, file in enumerate(top, start=1):
            effort = f"{_EFFORT_STYLE[file.effort]} {file.effort.value}"
            files.add_row(str(index), escape(short_path(file.file_path)), str(len(file.patterns)), effort)
        console.print(files)

    console.print("[bold cyan]Next Steps[/bold cyan]")
    console.print(f"  1. Review auto-convertible patterns ({analysis.convertible} items)")
    console.print("  2. Run migration: [cyan]formik-migrate convert[/cyan]")
    console.print(f"  3. Review flagged items ({analysis.needs_review} items)")
    console.print("  4. Test your forms")
    console.print()


def print_stats(analysis: CodebaseAnalysis, console: Optional[Console] = None) -> None:
    """Print the short usage summary."""
    console = console or Console()
    console.print()
    console.print("[bold]Formik Usage Summary:[/bold]")
    console.print()
    console.print(f"  Files with Formik:      [yellow]{analysis.formik_files}[/yellow]")
    console.print(f"  Auto-convertible:       [green]{analysis.convertible}[/green]")
    console.print(f"  Manual review needed:   [red]{analysis.needs_review}[/red]")
    console.print(f"  Estimated time:         [blue]{analysis.estimated_hours} hours[/blue]")
    console.print(f"  Time saved with tool:   [green]{analysis.estimated_savings} hours[/green]")
    console.print()


def print_conversion_summary(summary: ConversionSummary, console: Optional[Console] = None) -> None:
    """Print converted/skipped counts and the first warnings."""
    console = console or Console()
    count = len(summary.converted)
    if summary.dry_run:
        console.print(f"[green]Dry run complete! Would convert {count} files[/green]")
    else:
        console.print(f"[green]Converted {count} files[/green]")

    if summary.needs_review:
        console.print(f"[yellow]⚠ Skipped {summary.needs_review} files (manual review needed)[/yellow]")

    if summary.warnings:
        console.print("\n[yellow]Warnings:[/yellow]")
        for warning in summary.warnings[:MAX_WARNINGS]:
            console.print(f"[yellow]   • {escape(warning)}[/yellow]")
        if len(summary.warnings) > MAX_WARNINGS:
            console.print(f"[yellow]   ... and {len(summary.warnings) - MAX_WARNINGS} more[/yellow]")

    if summary.dry_run:
        console.print("\n[blue]Run without --dry-run to apply changes[/blue]")
    elif count:
        console.print("\n[bold green]Conversion complete![/bold green]")
        console.print("[cyan]Next steps:[/cyan]")
        console.print("   1. Install dependencies: [dim]npm install react-hook-form @hookform/resolvers[/dim]")
        console.print("   2. Review changes: [dim]git diff[/dim]")
        console.print("   3. Test your forms thoroughly")
        console.print("   4. Review files that need manual attention")
    console.print()
