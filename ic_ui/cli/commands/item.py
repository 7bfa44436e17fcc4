from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ic_common.errors import FetchError, ParseError, SaveError
from ic_core.fields import WorkingItem, derive_fields
from ic_core.markup import parse, serialize
from ic_core.tree import TreeNode
from ic_ui.console import TableModel
from ic_ui.wiring.dependencies import UIContext


def _read_tree(ctx: UIContext, path: Path) -> TreeNode:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        ctx.presenter.error(f"Cannot read {path}: {exc}")
        raise typer.Exit(1)
    try:
        return parse(text)
    except ParseError as exc:
        where = ""
        if exc.position is not None:
            line, column = exc.position
            where = f" (line {line}, column {column})"
        ctx.presenter.error(f"{path}: {exc}{where}")
        raise typer.Exit(1)


def _field_rows(item: WorkingItem) -> list[list[str]]:
    return [
        ["Item", item.item or "-"],
        ["Name", item.name or "-"],
        ["Protocol", item.protocol or "-"],
        ["Region", item.region or "-"],
    ]


def create_item_app(ctx: UIContext) -> typer.Typer:
    """Build the item Typer app (show/check/save)."""
    app = typer.Typer(help="Inspect and edit data item definitions.", no_args_is_help=True)

    @app.command("show")
    def item_show(
        item_id: str = typer.Argument(..., help="Data item id, e.g. 04000100."),
        protocol: Optional[str] = typer.Option(None, "--protocol", "-p", help="Protocol name."),
        region: Optional[str] = typer.Option(None, "--region", "-r", help="Region name."),
        direction: Optional[str] = typer.Option(None, "--dir", "-d", help="Direction attribute, e.g. 0 for read."),
    ) -> None:
        """Print an item's definition as markup."""
        settings = ctx.settings
        try:
            tree = ctx.store.fetch_item_tree(
                item_id,
                protocol or settings.default_protocol,
                region or settings.default_region,
                dir=direction,
            )
        except FetchError as exc:
            ctx.presenter.error(str(exc))
            raise typer.Exit(1)
        ctx.presenter.markup(serialize(tree))

    @app.command("check")
    def item_check(
        path: Path = typer.Argument(..., help="Markup file to check."),
    ) -> None:
        """Parse a markup file and show the fields derived from it."""
        tree = _read_tree(ctx, path)
        if tree.is_empty:
            ctx.presenter.warning(f"{path} is empty")
            return
        item = derive_fields(WorkingItem(item=""), tree)
        ctx.presenter.table(TableModel(title=str(path), columns=["Field", "Value"], rows=_field_rows(item)))

    @app.command("save")
    def item_save(
        path: Path = typer.Argument(..., help="Markup file holding one dataitem."),
        protocol: Optional[str] = typer.Option(
            None, "--protocol", "-p", help="Protocol when the root has no protocol attribute."
        ),
        region: Optional[str] = typer.Option(
            None, "--region", "-r", help="Region when the root has no region attribute."
        ),
    ) -> None:
        """Save a markup file's item through the catalog store."""
        settings = ctx.settings
        tree = _read_tree(ctx, path)
        base = WorkingItem(
            item="",
            protocol=protocol or settings.default_protocol,
            region=region or settings.default_region,
            dir=tree.attributes.get("dir"),
        )
        item = derive_fields(base, tree)
        if not item.item:
            ctx.presenter.error(f"{path}: root element has no id attribute")
            raise typer.Exit(1)
        try:
            ctx.registry().save(item)
        except SaveError as exc:
            ctx.presenter.error(str(exc))
            raise typer.Exit(1)
        ctx.presenter.success(f"Saved {item.item} ({item.protocol}, {item.region})")

    return app
