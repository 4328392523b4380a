"""
Conversion CLI commands (har, lighthouse).

Each command converts every capture file of its kind in one directory into
a single workbook, one sheet per file plus a Helper sheet.
"""
import traceback
from pathlib import Path

import click
from xlsxwriter.exceptions import FileCreateError

from perfsheet.cli.common import fail_fast_option, input_dir_option, output_option, report_stats
from perfsheet.core.config import ENV_HAR_DIR, ENV_LIGHTHOUSE_DIR, ConverterSettings
from perfsheet.core.errors import ParseError
from perfsheet.core.models import CaptureKind
from perfsheet.services.converter import BatchConverter


def run_conversion(ctx, kind, input_dir, output, fail_fast, strict=False):
    """Build settings from options and run a batch conversion."""
    settings = ConverterSettings.defaults(kind)
    if input_dir:
        settings.input_dir = Path(input_dir)
    if output:
        settings.output_path = Path(output)
    settings.fail_fast = fail_fast
    settings.strict_entries = strict

    converter = BatchConverter(settings)

    def progress_callback(path, total, current):
        click.echo(f"[{current}/{total}] {path.name}")

    try:
        click.echo(f"Converting {kind.value} captures from {settings.input_dir}...")
        stats = converter.convert(progress_callback=progress_callback)
    except FileNotFoundError as e:
        click.secho(str(e), fg='red', err=True)
        raise click.Abort()
    except ParseError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise click.Abort()
    except (OSError, FileCreateError) as e:
        click.secho(f"Error writing workbook: {e}", fg='red', err=True)
        if ctx.obj.verbose:
            click.echo(traceback.format_exc(), err=True)
        raise click.Abort()

    report_stats(stats, settings.output_path)


@click.command()
@input_dir_option(ENV_HAR_DIR)
@output_option
@fail_fast_option
@click.option(
    '--strict',
    is_flag=True,
    help='Treat an invalid entry as a parse error for its whole file'
)
@click.pass_context
def har(ctx, input_dir, output, fail_fast, strict):
    """Convert HAR files (default: ./harRepo) into output.xlsx."""
    run_conversion(ctx, CaptureKind.NETWORK, input_dir, output, fail_fast, strict)


@click.command()
@input_dir_option(ENV_LIGHTHOUSE_DIR)
@output_option
@fail_fast_option
@click.pass_context
def lighthouse(ctx, input_dir, output, fail_fast):
    """Convert Lighthouse JSON reports (default: ./lighthouseRepo) into lighthouse-output.xlsx."""
    run_conversion(ctx, CaptureKind.AUDIT, input_dir, output, fail_fast)
