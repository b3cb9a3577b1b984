# src/stepwise/cli/main.py
import json
import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty

from .. import __version__
from ..ast_nodes import load_program
from ..config import load_config
from ..errors import StepwiseError
from ..evaluator import Interpreter
from ..stdlib import build_stdlib

console = Console()
err_console = Console(stderr=True)


def _setup_logging(debug):
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(file):
    try:
        return load_program(file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{file} is not valid JSON: {e}")
    except (KeyError, AttributeError, TypeError) as e:
        raise click.ClickException(f"{file} is not a well-formed syntax tree: {e!r}")


@click.group()
@click.version_option(version=__version__, prog_name="Stepwise")
def cli():
    """Stepwise - run parsed programs of the step language"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--trace', is_flag=True, help="Print every call position.")
@click.option('--debug', is_flag=True, help="Enable debug logging.")
@click.option('--flag', 'flags', multiple=True, metavar="KEY=VALUE",
              help="Runtime flag, e.g. max_call_depth=100. Repeatable.")
def run(file, trace, debug, flags):
    """Run a program from its JSON syntax tree"""
    _setup_logging(debug)
    try:
        config = load_config(flags)
        program = _load(file)

        interpreter = Interpreter(build_stdlib(console), config)
        if trace or config.trace_positions:
            interpreter.on("position", lambda pos: err_console.print(
                f"[dim]-> line {pos.line}, column {pos.column}[/dim]"))

        result = interpreter.run_sync(program)
    except StepwiseError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    status = "ended by end()" if result.ended else "completed"
    err_console.print(f"[bold green]Program {status}[/bold green] "
                      f"({result.statements} statements)")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def ast(file):
    """Show the syntax tree of a program"""
    try:
        program = _load(file)
    except StepwiseError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    console.print(Panel.fit(
        Pretty(program.body, expand_all=True),
        title="[bold blue]Abstract Syntax Tree[/bold blue]",
        border_style="blue"
    ))


if __name__ == "__main__":
    cli()
