import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from codex_scaffold.cli.generate import generate_app
from codex_scaffold.cli.inspect import inspect_app

app = typer.Typer(
    name="codex-scaffold",
    help="Codex Scaffold CLI: generate artifacts and wire them into existing declarations.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(generate_app, name="generate")
app.add_typer(inspect_app, name="inspect")


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    app()
