"""Command-line interface for Lesson Export."""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from lesson_export import __version__
from lesson_export.config import HeaderPlaceholders, get_settings
from lesson_export.core.exporter import ExportReport, Exporter
from lesson_export.core.models import LessonPlanError, load_lesson_plans
from lesson_export.formats import ExportTarget

app = typer.Typer(
    name="lesson-export",
    help="Export lesson plans to Word (.docx) and PDF documents.",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    DOCX = "docx"
    PDF = "pdf"
    BOTH = "both"

    @property
    def targets(self) -> list[ExportTarget]:
        if self is OutputFormat.BOTH:
            return [ExportTarget.FLOW, ExportTarget.PAGE]
        return [ExportTarget(self.value)]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Lesson Export v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def print_report(report: ExportReport) -> None:
    for outcome in report.outcomes:
        if outcome.succeeded:
            console.print(f"[green]Success:[/green] {outcome.path}")
        else:
            console.print(f"[red]Error:[/red] {outcome.error}")


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="JSON file holding a lesson plan or a list of lesson plans",
        exists=True,
        dir_okay=False,
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.BOTH,
        "--format",
        "-f",
        case_sensitive=False,
        help="Document format to produce",
    ),
    slo_id: Optional[list[str]] = typer.Option(
        None,
        "--slo-id",
        "-s",
        help="SLO identifier prefixed to the filename. Repeat once per plan.",
    ),
    combine: Optional[str] = typer.Option(
        None,
        "--combine",
        "-c",
        help="Combine all plans into one document with this name",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        file_okay=False,
        help="Directory for the exported files (default: LESSON_EXPORT_OUTPUT_DIR or .)",
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        "-d",
        min=0.0,
        help="Seconds to wait between saving documents",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Export lesson plans as Word and PDF documents.

    Examples:

        lesson-export plan.json

        lesson-export plan.json --format pdf --slo-id SLO-1

        lesson-export plans.json --combine "Unit 3"

        lesson-export plans.json --output-dir exports --delay 0.5
    """
    configure_logging(verbose)
    settings = get_settings()
    use_output_dir = output_dir or settings.output_dir
    use_delay = settings.export_delay if delay is None else delay

    try:
        plans = load_lesson_plans(path)
    except LessonPlanError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not plans:
        console.print(f"[yellow]No lesson plans found in {path.name}[/yellow]")
        raise typer.Exit(1)

    if slo_id and len(slo_id) != len(plans):
        console.print(
            f"[red]Error:[/red] got {len(slo_id)} --slo-id value(s) "
            f"for {len(plans)} lesson plan(s)"
        )
        raise typer.Exit(1)

    if verbose:
        console.print(f"[blue]Input:[/blue] {path} ({len(plans)} plan(s))")
        console.print(f"[blue]Output:[/blue] {use_output_dir}")
        console.print(f"[blue]Format:[/blue] {output_format.value}")

    exporter = Exporter(HeaderPlaceholders.from_settings(settings))

    if combine is not None:
        if slo_id:
            console.print(
                "[yellow]Warning:[/yellow] --slo-id is ignored with --combine"
            )
        report = exporter.save_batch(
            plans, output_format.targets, use_output_dir, combine, delay=use_delay
        )
    else:
        report = exporter.save_many(
            plans,
            output_format.targets,
            use_output_dir,
            slo_ids=slo_id or None,
            delay=use_delay,
        )

    print_report(report)
    console.print(
        f"\n[bold]Complete:[/bold] {len(report.succeeded)} succeeded, "
        f"{len(report.failed)} failed"
    )
    raise typer.Exit(0 if report.ok else 1)


if __name__ == "__main__":
    app()
