"""Tokenize command for linebasic CLI - token dump of one line."""

import json

import click

from linebasic.lexer.tokenizer import tokenize


@click.command()
@click.argument('text')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
def tokenize_command(text, json_output):
    """Show how TEXT is tokenized."""
    tokens = tokenize(text)

    if json_output:
        click.echo(json.dumps([t.to_dict() for t in tokens], indent=2))
        return

    click.echo(f"Tokenization of '{text}':")
    for i, token in enumerate(tokens):
        subkind = f" ({token.subkind.name})" if token.subkind is not None else ""
        click.echo(f"  [{i}] {token.kind.value}{subkind} '{token.lexeme}'")
