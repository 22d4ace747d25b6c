"""Judge CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """Judge: run server-declared validation rules outside the server."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from judge.cli.rules_cmd import check_rules  # noqa: E402
from judge.cli.serve_cmd import serve  # noqa: E402
from judge.cli.validate_cmd import validate  # noqa: E402

cli.add_command(check_rules)
cli.add_command(serve)
cli.add_command(validate)
