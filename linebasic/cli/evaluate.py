"""Eval command for linebasic CLI - evaluate a single expression."""

import sys

import click

from linebasic.errors import BasicError
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO


@click.command()
@click.argument('expression')
@click.option('--let', 'assignments', multiple=True,
              help='Assignment to run first, e.g. --let "A = 5" (repeatable)')
@click.option('--seed', type=int, default=None, help='Seed for RND')
def eval_command(expression, assignments, seed):
    """Evaluate EXPRESSION and print its value."""
    interpreter = Interpreter(config=ExecutionConfig(random_seed=seed), io=BufferedIO())

    for assignment in assignments:
        result = interpreter.execute_immediate(f"LET {assignment}")
        if not result.success:
            click.echo(f"Error: {result.error}", err=True)
            sys.exit(1)

    try:
        value = interpreter.evaluate(expression)
    except BasicError as e:
        click.echo(f"Error: {e.kind.value}: {e}", err=True)
        sys.exit(1)

    click.echo(value.render())
