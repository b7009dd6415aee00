"""linebasic CLI package - command group for running and inspecting programs."""

import logging

import click

from linebasic.cli.run import run_command
from linebasic.cli.shell import shell_command
from linebasic.cli.tokenize import tokenize_command
from linebasic.cli.evaluate import eval_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose):
    """linebasic - line-numbered BASIC interpreter."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


main.add_command(run_command, "run")
main.add_command(shell_command, "shell")
main.add_command(tokenize_command, "tokenize")
main.add_command(eval_command, "eval")

__all__ = [
    "main",
    "run_command",
    "shell_command",
    "tokenize_command",
    "eval_command",
]
