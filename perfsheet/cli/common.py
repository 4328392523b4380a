"""
Options and helpers shared by CLI commands.
"""
import click

from perfsheet.core.config import ENV_OUTPUT


def input_dir_option(envvar):
    """--input-dir option reading its default from an environment variable."""
    return click.option(
        '--input-dir', '-i',
        type=click.Path(file_okay=False),
        envvar=envvar,
        help=f'Directory scanned for capture files (env: {envvar})'
    )


output_option = click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False),
    envvar=ENV_OUTPUT,
    help=f'Workbook path to write (env: {ENV_OUTPUT})'
)

fail_fast_option = click.option(
    '--fail-fast',
    is_flag=True,
    help='Stop at the first file that cannot be parsed'
)


def report_stats(stats, output_path):
    """Print conversion counts; abort when a file failed or nothing was converted."""
    click.echo("\nConversion complete!")
    click.secho(f"  Converted: {stats['converted']} file(s)", fg='green')
    if stats['empty']:
        click.secho(f"  Empty: {stats['empty']} file(s)", fg='yellow')
    if stats['failed']:
        click.secho(f"  Failed: {stats['failed']} file(s)", fg='yellow')
    click.echo(f"  Workbook: {output_path}")

    if stats['converted'] == 0:
        click.secho("No sheets were written.", fg='red', err=True)
        raise click.Abort()
    if stats['failed']:
        raise click.Abort()
