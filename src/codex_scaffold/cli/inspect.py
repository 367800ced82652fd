from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codex_scaffold.core.ast import SyntaxTree, parse_source
from codex_scaffold.core.errors import ScaffoldError
from codex_scaffold.core.locator import DecoratorApplication, iter_decorators

inspect_app = typer.Typer(help="Inspect declarations in source files.")
console = Console()


def _describe_argument(tree: SyntaxTree, application: DecoratorApplication) -> tuple[str, str]:
    argument = application.argument
    if argument is None:
        return "-", ""
    if argument.type != "object":
        return argument.type, ""
    keys = []
    for prop in argument.named_children:
        key = prop.child_by_field_name("key") if prop.type == "pair" else None
        if key is not None:
            keys.append(tree.text(key))
    return argument.type, ", ".join(keys)


@inspect_app.command("decorators")
def decorators(
    file: Annotated[Path, typer.Argument(help="TypeScript file to inspect.")],
    name: Annotated[str, typer.Option(help="Decorator name to look for.")] = "Component",
    module: Annotated[str | None, typer.Option(help="Only match decorators imported from this module.")] = None,
    language: Annotated[str | None, typer.Option(help="Language (ts, tsx); detected from the extension.")] = None,
) -> None:
    """List applications of a decorator and the properties of their metadata."""
    try:
        source = file.read_bytes()
    except FileNotFoundError:
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1) from None

    try:
        tree = parse_source(source, str(file), language)
        applications = list(iter_decorators(tree, name, module))
    except (ScaffoldError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    table = Table(show_lines=False)
    for header in ("line", "column", "argument", "properties"):
        table.add_column(header)
    for application in applications:
        row, column = application.decorator.start_point
        argument_type, keys = _describe_argument(tree, application)
        table.add_row(str(row + 1), str(column + 1), argument_type, keys)
    console.print(table)
    console.print(f"({len(applications)} rows)")
