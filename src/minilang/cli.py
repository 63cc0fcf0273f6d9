"""
MiniLang command line host.

Commands:
- run: Evaluate a program and print its result
- tokens: Show the token stream of a program
- ast: Show the parsed tree of a program
"""

from __future__ import annotations

import json
import logging
import platform
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from minilang import __version__
from minilang.core.config import InterpreterSettings, find_settings, load_settings
from minilang.core.errors import MiniLangError
from minilang.core.host import execute
from minilang.core.ir.nodes import Constant
from minilang.core.ir.tokens import TokenKind
from minilang.core.ir.values import Value
from minilang.core.lang.parser import parse
from minilang.core.lang.tokenizer import default_readers, tokenize

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="MiniLang - tokenize, parse, and evaluate MiniLang programs",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"minilang {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """MiniLang CLI main callback for global options."""
    pass


# =============================================================================
# Helpers
# =============================================================================


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=1)


def _read_source(file: Path | None, code: str | None) -> str:
    """Program text from exactly one of FILE or --code."""
    if code is not None:
        if file is not None:
            raise _fail("Provide exactly one of FILE or --code")
        return code
    if file is None:
        raise _fail("Provide exactly one of FILE or --code")
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        raise _fail(f"Cannot read {file}: {e}") from e


def _resolve_settings(config: Path | None, file: Path | None) -> InterpreterSettings:
    """Explicit --config wins; otherwise minilang.toml next to the program."""
    if config is not None:
        if not config.exists():
            raise _fail(f"Config file not found: {config}")
        return load_settings(config)
    return find_settings(file.parent if file is not None else Path.cwd())


def _parse_var(assignment: str, settings: InterpreterSettings) -> tuple[str, Value]:
    """Turn NAME=LITERAL into a binding, reading LITERAL as a MiniLang constant."""
    name, sep, literal = assignment.partition("=")
    name = name.strip()
    if not sep or not name:
        raise _fail(f"Invalid --var {assignment!r}: expected NAME=LITERAL")
    node = parse(literal, settings)
    if not isinstance(node, Constant):
        raise _fail(f"Invalid --var {assignment!r}: {literal.strip()!r} is not a literal")
    return name, Value(kind=node.kind, payload=node.value)


def _print_variables(variables: dict[str, Value]) -> None:
    table = Table(title="Variables")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Value")
    for name, value in variables.items():
        table.add_row(name, value.kind.value, escape(str(value)))
    console.print(table)


FileArg = Annotated[
    Path | None, typer.Argument(help="Program file", dir_okay=False, show_default=False)
]
CodeOpt = Annotated[
    str | None, typer.Option("--code", "-c", help="Program text (instead of FILE)")
]
ConfigOpt = Annotated[
    Path | None, typer.Option("--config", help="Path to minilang.toml (default: auto-detect)")
]


# =============================================================================
# Commands
# =============================================================================


@app.command("run")
def run_command(
    file: FileArg = None,
    code: CodeOpt = None,
    var: Annotated[
        list[str] | None,
        typer.Option("--var", "-v", help="Seed a variable: NAME=LITERAL (repeatable)"),
    ] = None,
    config: ConfigOpt = None,
    show_vars: Annotated[
        bool, typer.Option("--show-vars", help="Print the final variable bindings")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
) -> None:
    """
    Evaluate a program and print its result.

    Examples:
        minilang run program.ml
        minilang run -c "var x : int = 2; x * 21"
        minilang run -c "n * 2" --var n=21
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    source = _read_source(file, code)
    try:
        settings = _resolve_settings(config, file)
        variables = dict(_parse_var(v, settings) for v in var or [])
        result = execute(source, variables, settings, file=file)
    except MiniLangError as e:
        raise _fail(str(e)) from e

    typer.echo(str(result))
    if show_vars:
        _print_variables(variables)


@app.command("tokens")
def tokens_command(
    file: FileArg = None,
    code: CodeOpt = None,
    config: ConfigOpt = None,
) -> None:
    """Print the token stream of a program as a table."""
    source = _read_source(file, code)
    try:
        settings = _resolve_settings(config, file)
    except MiniLangError as e:
        raise _fail(str(e)) from e

    table = Table(title="Tokens")
    table.add_column("Pos", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")

    invalid = None
    for tok in tokenize(source, default_readers(settings.char_literals)):
        table.add_row(str(tok.pos), tok.kind.value, escape(tok.text))
        if tok.kind == TokenKind.INVALID:
            invalid = tok
    console.print(table)

    if invalid is not None:
        raise _fail(f"{invalid.text} (at offset {invalid.pos})")


@app.command("ast")
def ast_command(
    file: FileArg = None,
    code: CodeOpt = None,
    config: ConfigOpt = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Print the parsed tree of a program."""
    source = _read_source(file, code)
    try:
        settings = _resolve_settings(config, file)
        root = parse(source, settings)
    except MiniLangError as e:
        raise _fail(str(e)) from e

    if output_json:
        console.print_json(json.dumps(root.model_dump(mode="json")))
        return
    typer.echo(str(root))


def main() -> None:
    """Entry point for the minilang console script."""
    app()


if __name__ == "__main__":
    main()
