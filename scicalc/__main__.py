"""CLI for the scicalc expression evaluator.

Usage:
    python -m scicalc eval "2+3×4"                      # Evaluate, print display value
    python -m scicalc eval "sin(90)" --degrees          # Degrees for trig
    python -m scicalc eval "5÷0" --json                 # Machine-readable result
    python -m scicalc tokens "-sin(x)"                  # Show the token stream
    python -m scicalc rpn "2^3^2"                       # Show the postfix form
    python -m scicalc prepare "x^2+y^2=1"               # Show preprocessing and plot kind
    python -m scicalc table "y=x^2" --start -2 --stop 2 # Tabulate an explicit plot
    python -m scicalc repl                              # Interactive calculator

Expressions that start with "-" need a "--" separator: eval -- "-5+3".
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from scicalc.config import Settings
from scicalc.engine import CompiledExpression, compile_expression, sample, try_evaluate
from scicalc.errors import CalculatorError
from scicalc.formatting import format_result
from scicalc.models import AngleMode

app = typer.Typer(
    name="scicalc",
    help="Scientific expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _resolve_mode(mode: Optional[str], degrees: bool = False) -> AngleMode:
    """Angle mode from --degrees or --mode, falling back to SCICALC_ANGLE_MODE."""
    if degrees:
        return AngleMode.DEGREES
    if mode is None:
        return Settings.from_env().angle_mode
    try:
        return AngleMode(mode.lower())
    except ValueError:
        console.print(f"[red]Invalid mode: {escape(mode)}[/red]. Choose: radians, degrees")
        raise typer.Exit(1)


def _compile_or_exit(expression: str) -> CompiledExpression:
    try:
        return compile_expression(expression)
    except CalculatorError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pipeline stage"),
) -> None:
    """Set up logging for all commands."""
    level = "DEBUG" if verbose else Settings.from_env().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '2(3+4)' or 'sin(90)'"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Angle mode: radians, degrees"),
    degrees: bool = typer.Option(False, "--degrees", "-d", help="Shorthand for --mode degrees"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
) -> None:
    """Evaluate an expression and print the display value."""
    result = try_evaluate(expression, _resolve_mode(mode, degrees))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(result.display)

    if not result.ok:
        console.print(f"[red]{escape(result.error_kind or '')}: {escape(result.message)}[/red]")
        raise typer.Exit(1)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token stream after preprocessing."""
    compiled = _compile_or_exit(expression)

    table = Table(title=f"Tokens: {escape(compiled.prepared.canonical)}", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="green")
    table.add_column("Text")
    table.add_column("Value", justify="right")

    for i, tok in enumerate(compiled.tokens, 1):
        value = "" if tok.value is None else repr(tok.value)
        table.add_row(str(i), tok.kind.value, escape(tok.text), value)

    console.print()
    console.print(table)
    console.print()


@app.command("rpn")
def cmd_rpn(
    expression: str = typer.Argument(help="Expression to convert"),
) -> None:
    """Print the postfix (RPN) form of an expression."""
    compiled = _compile_or_exit(expression)
    typer.echo(" ".join(t.text for t in compiled.postfix))


@app.command("prepare")
def cmd_prepare(
    expression: str = typer.Argument(help="Expression or equation to preprocess"),
) -> None:
    """Show the canonical text and plot kind."""
    from scicalc.preprocessor import prepare

    prepared = prepare(expression)
    typer.echo(prepared.canonical)
    typer.echo(f"plot: {prepared.plot_kind.value}")


@app.command("table")
def cmd_table(
    expression: str = typer.Argument(help="Explicit plot, e.g. 'y=x^2' or 'sin(x)'"),
    start: float = typer.Option(-10.0, "--start", help="First x value"),
    stop: float = typer.Option(10.0, "--stop", help="Last x value"),
    steps: Optional[int] = typer.Option(None, "--steps", "-n", help="Number of intervals"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Angle mode: radians, degrees"),
    degrees: bool = typer.Option(False, "--degrees", "-d", help="Shorthand for --mode degrees"),
) -> None:
    """Tabulate y = f(x) over a range."""
    angle_mode = _resolve_mode(mode, degrees)
    n = steps if steps is not None else Settings.from_env().sample_steps
    try:
        points = sample(expression, start, stop, n, angle_mode)
    except (CalculatorError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"y = {escape(expression)}", show_header=True, header_style="bold")
    table.add_column("x", justify="right", style="cyan")
    table.add_column("y", justify="right")
    for p in points:
        y = "[dim]--[/dim]" if p.y is None else format_result(p.y)
        table.add_row(format_result(p.x), y)

    console.print()
    console.print(table)
    console.print()


@app.command("repl")
def cmd_repl(
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Starting angle mode: radians, degrees"),
    degrees: bool = typer.Option(False, "--degrees", "-d", help="Shorthand for --mode degrees"),
) -> None:
    """Interactive calculator. 'deg' / 'rad' switch modes, 'quit' exits."""
    angle_mode = _resolve_mode(mode, degrees)
    console.print(f"[dim]scicalc ({angle_mode.value}) - 'deg', 'rad', 'quit'[/dim]")

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break

        if not line:
            continue
        if line in ("quit", "exit"):
            break
        if line in ("deg", "rad"):
            angle_mode = AngleMode.DEGREES if line == "deg" else AngleMode.RADIANS
            console.print(f"[dim]mode: {angle_mode.value}[/dim]")
            continue

        result = try_evaluate(line, angle_mode)
        typer.echo(result.display)
        if not result.ok:
            console.print(f"[dim]{escape(result.error_kind or '')}: {escape(result.message)}[/dim]")


if __name__ == "__main__":
    app()
