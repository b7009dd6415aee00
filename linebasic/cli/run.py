"""Run command for linebasic CLI."""

import json
import sys

import click

from linebasic.errors import BasicError
from linebasic.loader import load_file
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import BufferedIO, ConsoleIO


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--input', '-i', 'input_lines', multiple=True,
              help='Line to feed to INPUT (repeatable); stdin is used when omitted')
@click.option('--seed', type=int, default=None, help='Seed for RND')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def run_command(program, input_lines, seed, json_output):
    """Load a BASIC program file and run it."""
    buffered = json_output or bool(input_lines)
    io = BufferedIO(input_lines) if buffered else ConsoleIO()
    interpreter = Interpreter(config=ExecutionConfig(random_seed=seed), io=io)

    try:
        line_count = load_file(interpreter, program)
    except BasicError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: cannot read {program}: {e}", err=True)
        sys.exit(1)

    result = interpreter.run_program()

    if json_output:
        output = result.to_dict()
        output["program"] = str(program)
        output["line_count"] = line_count
        output["variables"] = {name: value.payload for name, value in interpreter.get_variables()}
        click.echo(json.dumps(output, indent=2))
    elif buffered:
        click.echo(result.output, nl=False)

    if not result.success:
        if not json_output:
            click.echo(f"Error at line {result.line_number}: {result.error}", err=True)
        sys.exit(1)
