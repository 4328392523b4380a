"""
Summary CLI command.

Prints the observed baseline of a HAR file, or the scores and metrics of a
Lighthouse report, without writing a workbook.
"""
import json

import click

from perfsheet.core.constants import SECTION_CATEGORY_SCORES, SECTION_PAGE_TIMINGS, SECTION_PERFORMANCE_METRICS
from perfsheet.core.errors import ParseError
from perfsheet.core.models import CaptureKind
from perfsheet.readers.capture_reader import load_capture
from perfsheet.services.assembler import ReportAssembler

STAT_LABELS = {
    "response_ms": "Response (ms)",
    "size_kb": "Size (KB)",
    "wait_ms": "Wait/TTFB (ms)",
}


def _echo_network(report):
    click.echo(f"Requests: {len(report.rows)}")
    for column, bundle in report.stats.items():
        click.echo(f"\n{STAT_LABELS.get(column, column)}")
        click.echo(f"  Average: {bundle.mean}  Median: {bundle.median}  P95: {bundle.p95}")
        click.echo(f"  Min: {bundle.min}  Max: {bundle.max}  Total: {bundle.sum}")

    pages = report.section(SECTION_PAGE_TIMINGS)
    if pages:
        click.echo("\nPage load timings:")
        for page in pages:
            click.echo(f"  {page.title}: DOMContentLoaded {page.content_loaded_ms}, Load {page.load_ms}")


def _rating_color(rating):
    return {"Good": 'green', "Needs Work": 'yellow', "Poor": 'red'}.get(rating.value)


def _echo_audit(report):
    click.echo("Category scores:")
    for category in report.section(SECTION_CATEGORY_SCORES):
        click.secho(
            f"  {category.category}: {category.score} ({category.rating.value})",
            fg=_rating_color(category.rating),
        )

    click.echo("\nPerformance metrics:")
    for metric in report.section(SECTION_PERFORMANCE_METRICS):
        click.secho(
            f"  {metric.metric}: {metric.display} [{metric.rating.value}]",
            fg=_rating_color(metric.rating),
        )


@click.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--format', 'output_format',
    type=click.Choice(['text', 'json']),
    default='text',
    help='Output format'
)
def summary(file, output_format):
    """Print the baseline statistics or scores of one capture file."""
    try:
        capture = load_capture(file)
        report = ReportAssembler().assemble(capture)
    except ParseError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise click.Abort()

    if output_format == 'json':
        data = report.model_dump(mode="json", exclude={"rows"})
        data["row_count"] = len(report.rows)
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.secho(f"{report.name} ({report.kind.value})", bold=True)
    if report.is_empty:
        click.secho("No valid entries; nothing to summarize.", fg='yellow')
    elif report.kind == CaptureKind.NETWORK:
        _echo_network(report)
    else:
        _echo_audit(report)

    if report.errors:
        click.secho(f"\nSkipped {len(report.errors)} invalid entr{'y' if len(report.errors) == 1 else 'ies'}", fg='yellow')
