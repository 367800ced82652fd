from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codex_scaffold.core.errors import ScaffoldError
from codex_scaffold.core.scaffold import scaffold_directive
from codex_scaffold.core.workspace import load_workspace
from codex_scaffold.models import ScaffoldOptions, ScaffoldResult
from codex_scaffold.tree import HostTree

generate_app = typer.Typer(help="Generate artifacts and register them with their host declaration.")
console = Console()


def _render_result(result: ScaffoldResult) -> None:
    table = Table(show_lines=False)
    table.add_column("action")
    table.add_column("path")
    for path in result.created:
        table.add_row("[green]CREATE[/green]", path)
    for path in result.updated:
        table.add_row("[yellow]UPDATE[/yellow]", path)
    for path in result.unchanged:
        table.add_row("[dim]UNCHANGED[/dim]", path)
    console.print(table)
    console.print(f"{result.class_name} with selector [bold]{result.selector}[/bold]")


@generate_app.command("directive")
def directive(
    name: Annotated[str, typer.Argument(help="Name of the directive, optionally with a path (shared/highlight).")],
    project: Annotated[str | None, typer.Option(help="Workspace project to add the directive to.")] = None,
    path: Annotated[str | None, typer.Option(help="Directory to create the directive in.")] = None,
    prefix: Annotated[str | None, typer.Option(help="Selector prefix; defaults to the project prefix.")] = None,
    selector: Annotated[str | None, typer.Option(help="Explicit HTML selector.")] = None,
    flat: Annotated[bool, typer.Option(help="Create files without a dedicated folder.")] = True,
    skip_tests: Annotated[bool, typer.Option(help="Do not create a spec file.")] = False,
    skip_import: Annotated[bool, typer.Option(help="Do not register the directive anywhere.")] = False,
    standalone: Annotated[bool, typer.Option(help="Register in @Component imports instead of @NgModule.")] = True,
    export: Annotated[bool, typer.Option(help="Also list the directive in @NgModule exports.")] = False,
    module: Annotated[str | None, typer.Option(help="File hosting the declaration to register with.")] = None,
    root: Annotated[Path, typer.Option(help="Workspace root directory.")] = Path("."),
    workspace: Annotated[str | None, typer.Option(help="Workspace file relative to the root.")] = None,
    dry_run: Annotated[bool, typer.Option(help="Report changes without writing them.")] = False,
) -> None:
    """Generate a directive."""
    tree = HostTree(root, dry_run=dry_run)
    options = ScaffoldOptions(
        name=name,
        project=project,
        path=path,
        prefix=prefix,
        selector=selector,
        flat=flat,
        skip_tests=skip_tests,
        skip_import=skip_import,
        standalone=standalone,
        export=export,
        module=module,
    )
    try:
        config = load_workspace(tree, workspace)
        result = scaffold_directive(tree, options, config)
    except ScaffoldError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    _render_result(result)
    if dry_run:
        console.print("[yellow]Dry run: nothing was written.[/yellow]")
