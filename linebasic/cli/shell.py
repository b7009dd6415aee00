"""Interactive shell command for linebasic CLI."""

import click

from linebasic.errors import BasicError
from linebasic.lexer.tokenizer import tokenize
from linebasic.loader import split_line_number
from linebasic.runtime.executor import ExecutionConfig
from linebasic.runtime.interpreter import Interpreter
from linebasic.runtime.io import ConsoleIO

HELP_TEXT = """\
BASIC Interpreter Usage:
  statement                       - Execute immediately
  line_number statement           - Add to program (use RUN to execute)
  line_number                     - Delete a program line

Statements:
  PRINT expr [, expr] [; expr]    - Print expressions
  LET var = expr                  - Assign value to variable
  INPUT ["prompt";] var           - Input value to variable
  IF condition THEN statement     - Conditional execution
  FOR var = start TO end [STEP s] - For loop
  NEXT [var]                      - End of for loop
  GOTO line_number                - Jump to line
  GOSUB line_number               - Call subroutine
  RETURN                          - Return from subroutine
  END / STOP                      - End program
  REM comment                     - Comment line

Functions:
  ABS(x), SIN(x), COS(x), TAN(x), SQR(x), INT(x), RND[(x)]
  LEN(s$), VAL(s$), STR$(x), CHR$(x), ASC(s$)
  LEFT$(s$, n), RIGHT$(s$, n), MID$(s$, start[, n])

Operators: +, -, *, /, ^, MOD, =, <>, <, <=, >, >=, AND, OR, NOT

Shell commands:
  RUN     - Run the program
  LIST    - List the program lines
  VARS    - Show variables in memory
  NEW     - Clear program and variables
  DEBUG text - Show the tokens of text
  HELP    - Show this text
  QUIT or EXIT - Leave the shell
"""


def _show_variables(interpreter: Interpreter) -> None:
    variables = interpreter.get_variables()
    if not variables:
        click.echo("No variables defined")
        return
    click.echo("Defined variables:")
    for name, value in variables:
        shown = value.render() if value.is_number else f'"{value.text}"'
        click.echo(f"  {name} = {shown}")


def _handle_line(interpreter: Interpreter, text: str) -> bool:
    """Process one shell line. Returns False when the shell should exit."""
    command = text.upper()

    if command in ("QUIT", "EXIT"):
        return False
    if command == "HELP":
        click.echo(HELP_TEXT, nl=False)
    elif command == "RUN":
        if not interpreter.list_lines():
            click.echo("No program loaded. Use line numbers to add program lines.")
            return True
        result = interpreter.run_program()
        if not result.success:
            click.echo(f"Error at line {result.line_number}: {result.error}")
    elif command == "LIST":
        lines = interpreter.list_lines()
        if not lines:
            click.echo("No program loaded")
        for number, statement in lines:
            click.echo(f"{number} {statement}")
    elif command == "VARS":
        _show_variables(interpreter)
    elif command == "NEW":
        interpreter.reset()
        click.echo("Program cleared")
    elif command.startswith("DEBUG "):
        for i, token in enumerate(tokenize(text[6:])):
            click.echo(f"  [{i}] {token.kind.value} '{token.lexeme}'")
    elif text[0].isdigit():
        number, statement = split_line_number(text)
        try:
            if statement:
                interpreter.load_line(number, statement)
            elif not interpreter.delete_line(number):
                click.echo(f"Line {number} not found")
        except BasicError as e:
            click.echo(str(e))
    else:
        result = interpreter.execute_immediate(text)
        if not result.success:
            click.echo(f"Error: {result.error}")

    return True


@click.command()
@click.option('--seed', type=int, default=None, help='Seed for RND')
def shell_command(seed):
    """Interactive BASIC session."""
    stdin = click.get_text_stream('stdin')
    stdout = click.get_text_stream('stdout')
    interpreter = Interpreter(
        config=ExecutionConfig(random_seed=seed),
        io=ConsoleIO(stdout=stdout, stdin=stdin),
    )

    click.echo("BASIC Interpreter")
    click.echo("Type 'HELP' for commands, 'QUIT' to exit\n")

    while True:
        click.echo("READY")
        raw = stdin.readline()
        if not raw:
            break
        text = raw.strip()
        if not text:
            continue
        if not _handle_line(interpreter, text):
            break
