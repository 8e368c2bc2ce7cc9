import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dataexpr._engine import Engine, create_engine
from dataexpr._errors import DataExprError
from dataexpr._types import Mode

from .config import ConfigError, get_config, resolve_pack

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

PackOption = Annotated[
    list[str] | None,
    typer.Option("-p", "--pack", help="Pack name or module path (e.g., my_package.ops:pack). Repeatable"),
]
NoBaseOption = Annotated[
    bool,
    typer.Option("--no-base", help="Do not include the base pack"),
]
ExcludeOption = Annotated[
    list[str] | None,
    typer.Option("-x", "--exclude", help="Operation name to remove (e.g., $debug). Repeatable"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Dataexpr CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(code=1)


def _read_json(source: str, what: str) -> Any:
    """Parse JSON from inline text, or from stdin when ``source`` is ``-``."""
    text = sys.stdin.read() if source == "-" else source
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise _fail(f"Invalid JSON in {what}: {e}") from e


def _read_json_file(source: str, what: str) -> Any:
    """Parse JSON from a file path, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return _read_json(source, what)
    path = Path(source)
    if not path.is_file():
        msg = f"{what.capitalize()} file not found: {path}"
        raise _fail(msg)
    return _read_json(path.read_text(encoding="utf-8"), what)


def _build_engine(packs: list[str] | None, *, no_base: bool, exclude: list[str] | None) -> Engine:
    """Create an engine from CLI options layered over [tool.dataexpr] config."""
    try:
        config = get_config()
        references = packs if packs else list(config.packs)
        search_path = (config.project_root or Path.cwd()).resolve()
        resolved = [resolve_pack(reference, search_path) for reference in references]
    except ConfigError as e:
        raise _fail(str(e)) from e

    logger.debug("Packs: %s", ", ".join(references) or "(none)")
    return create_engine(
        packs=resolved,
        include_base=config.include_base and not no_base,
        exclude=[*config.exclude, *(exclude or [])],
    )


def _emit(result: Any) -> None:
    typer.echo(json.dumps(result, ensure_ascii=False, default=str))


@app.command()
def apply(
    expression: Annotated[
        str,
        typer.Argument(help="Expression as JSON text, or '-' to read it from stdin"),
    ],
    *,
    data: Annotated[
        str | None,
        typer.Option("-d", "--data", help="Path to JSON input data, or '-' for stdin"),
    ] = None,
    pack: PackOption = None,
    no_base: NoBaseOption = False,
    exclude: ExcludeOption = None,
) -> None:
    """Apply an expression to JSON input data and print the result as JSON."""
    if expression == "-" and data == "-":
        msg = "Only one of the expression and the input data can be read from stdin"
        raise _fail(msg)

    engine = _build_engine(pack, no_base=no_base, exclude=exclude)
    value = _read_json(expression, "expression")
    input_data = _read_json_file(data, "input data") if data is not None else None

    try:
        result = engine.apply(value, input_data)
    except DataExprError as e:
        raise _fail(str(e)) from e
    _emit(result)


@app.command()
def evaluate(
    expression: Annotated[
        str,
        typer.Argument(help="Expression as JSON text, or '-' to read it from stdin"),
    ],
    *,
    pack: PackOption = None,
    no_base: NoBaseOption = False,
    exclude: ExcludeOption = None,
) -> None:
    """Evaluate a self-contained expression and print the result as JSON."""
    engine = _build_engine(pack, no_base=no_base, exclude=exclude)
    value = _read_json(expression, "expression")

    try:
        result = engine.evaluate(value)
    except DataExprError as e:
        raise _fail(str(e)) from e
    _emit(result)


@app.command()
def validate(
    expression: Annotated[
        str,
        typer.Argument(help="Expression as JSON text, or '-' to read it from stdin"),
    ],
    *,
    pack: PackOption = None,
    no_base: NoBaseOption = False,
    exclude: ExcludeOption = None,
) -> None:
    """Check an expression for unknown operators without running it."""
    engine = _build_engine(pack, no_base=no_base, exclude=exclude)
    value = _read_json(expression, "expression")

    errors = engine.validate_expression(value)
    if not errors:
        err_console.print("[green]✓ Expression is valid[/green]")
        raise typer.Exit(code=0)

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Problem")
    for index, error in enumerate(errors, start=1):
        table.add_row(str(index), escape(error))

    err_console.print(Panel(table, title="[bold]Validation Errors[/bold]", border_style="red"))
    err_console.print(f"[red]✗ {len(errors)} unknown operator(s)[/red]")
    raise typer.Exit(code=1)


@app.command()
def names(
    *,
    pack: PackOption = None,
    no_base: NoBaseOption = False,
    exclude: ExcludeOption = None,
) -> None:
    """List the registered operation names and the modes they support."""
    engine = _build_engine(pack, no_base=no_base, exclude=exclude)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Operation", style="bold")
    table.add_column("Apply", justify="center")
    table.add_column("Evaluate", justify="center")

    for name in engine.expression_names:
        definition = engine.definitions[name]
        table.add_row(
            escape(name),
            "[green]✓[/green]" if definition.supports(Mode.APPLY) else "[dim]-[/dim]",
            "[green]✓[/green]" if definition.supports(Mode.EVALUATE) else "[dim]-[/dim]",
        )

    out_console.print(
        Panel(
            table,
            title="[bold]Operations[/bold]",
            subtitle=f"[dim]{len(engine.expression_names)} registered[/dim]",
            border_style="cyan",
        ),
    )


def main() -> None:
    app()
