"""
Command-line interface for protocol-item-config.

Browse the data item catalog and check or save item definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ic_common.api import ConfigurationError, configure_logging
from ic_ui.cli.commands.catalog import create_catalog_app
from ic_ui.cli.commands.item import create_item_app
from ic_ui.wiring.dependencies import UIContext

# Initialize global context (lazy)
ctx_store = UIContext()

catalog_app = create_catalog_app(ctx_store)
item_app = create_item_app(ctx_store)

app = typer.Typer(help="Inspect and edit protocol data item definitions.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (YAML).",
    ),
) -> None:
    """Global entry point: logging and settings location."""
    configure_logging(force=True)
    ctx_store.configure(config)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        ctx_store.settings
    except ConfigurationError as exc:
        ctx_store.presenter.error(str(exc))
        raise typer.Exit(2)


app.add_typer(catalog_app, name="catalog")
app.add_typer(item_app, name="item")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
