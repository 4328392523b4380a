"""
Click-based command line interface for perfsheet.

Commands:
- har: convert a directory of HAR files into a workbook
- lighthouse: convert a directory of Lighthouse reports into a workbook
- summary: print the baseline or scores of a single capture
"""
import logging

import click

from perfsheet import __version__
from perfsheet.cli.commands.convert import har, lighthouse
from perfsheet.cli.commands.summary import summary

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger once for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


class CLIContext:
    """State shared between commands through ctx.obj."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name='perfsheet')
@click.pass_context
def main(ctx, verbose):
    """Convert HAR and Lighthouse captures into Excel workbooks."""
    configure_logging(verbose)
    ctx.obj = CLIContext(verbose=verbose)


main.add_command(har)
main.add_command(lighthouse)
main.add_command(summary)
