from __future__ import annotations

from typing import List, Optional

import typer

from ic_common.errors import ItemConfigError
from ic_core.search import run_search
from ic_store.api import CatalogEntry
from ic_ui.console import TableModel
from ic_ui.wiring.dependencies import UIContext

CATALOG_COLUMNS = ["Item", "Name", "Protocol", "Region", "Dir"]


def _rows(entries: List[CatalogEntry]) -> List[List[str]]:
    return [
        [entry.item, entry.name or "-", entry.protocol or "-", entry.region or "-", entry.dir or "-"]
        for entry in entries
    ]


def _load_entries(ctx: UIContext) -> List[CatalogEntry]:
    try:
        return list(ctx.store.get_all_items())
    except ItemConfigError as exc:
        ctx.presenter.error(str(exc))
        raise typer.Exit(1)


def create_catalog_app(ctx: UIContext) -> typer.Typer:
    """Build the catalog Typer app (list/search)."""
    app = typer.Typer(help="Browse the data item catalog.", no_args_is_help=True)

    @app.command("list")
    def catalog_list(
        protocol: Optional[str] = typer.Option(
            None,
            "--protocol",
            "-p",
            help="Only list items defined for this protocol.",
        ),
    ) -> None:
        """List catalog entries."""
        entries = _load_entries(ctx)
        if protocol:
            entries = [e for e in entries if (e.protocol or "").upper() == protocol.upper()]
        if not entries:
            ctx.presenter.warning(f"No items found under {ctx.settings.catalog_dir}")
            return
        ctx.presenter.table(
            TableModel(title="Data Items", columns=CATALOG_COLUMNS, rows=_rows(entries))
        )

    @app.command("search")
    def catalog_search(
        term: str = typer.Argument(..., help="Item id prefix or part of a name."),
    ) -> None:
        """Search the catalog the way the search box does."""
        result = run_search(term, _load_entries(ctx))
        if not result.matches:
            ctx.presenter.warning(f"No items match '{term}' ({result.kind.value})")
            return
        ctx.presenter.table(
            TableModel(
                title=f"Matches for '{term}' ({result.kind.value})",
                columns=CATALOG_COLUMNS,
                rows=_rows(result.matches),
            )
        )

    return app
