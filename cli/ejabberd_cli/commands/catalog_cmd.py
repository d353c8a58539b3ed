from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from ejabberd_client import InvalidConfiguration, UnknownCommand

from .. import console
from ..config import resolve_config
from ..http import load_registry


def _registry(catalog: str | None):
    try:
        return load_registry(resolve_config(), catalog)
    except InvalidConfiguration as e:
        console.err(str(e))
        raise typer.Exit(code=2)


def list_commands(
        filter_: str | None = typer.Option(None, "--filter", "-f", help="Only commands whose name contains TEXT."),
        catalog: str | None = typer.Option(None, "--catalog", help="Extra command catalog (TOML)."),
):
    registry = _registry(catalog)
    needle = (filter_ or "").strip().lower()

    table = Table(title=f"Commands (catalog {registry.version or '-'})")
    table.add_column("name", style="bold")
    table.add_column("params")
    table.add_column("returns")
    table.add_column("description")

    for definition in registry:
        if needle and needle not in definition.name:
            continue
        params = " ".join(p.key if p.required else f"[{p.key}]" for p in definition.params)
        table.add_row(definition.name, escape(params) or "-", definition.returns, escape(definition.doc) or "-")

    console.console.print(table)


def describe_command(
        name: str = typer.Argument(..., help="Command name, e.g. register."),
        catalog: str | None = typer.Option(None, "--catalog", help="Extra command catalog (TOML)."),
):
    registry = _registry(catalog)
    try:
        definition = registry.get(name)
    except UnknownCommand as e:
        console.err(str(e))
        raise typer.Exit(code=2)

    console.ok(f"{definition.name}: {definition.doc or '-'}")
    console.console.print(f"  path: {definition.path}")
    console.console.print(f"  returns: {definition.returns}")
    if not definition.params:
        console.console.print("  params: -")
        return

    table = Table()
    table.add_column("key", style="bold")
    table.add_column("required")
    table.add_column("default")
    table.add_column("kind")
    table.add_column("transform")
    for p in definition.params:
        table.add_row(
            p.key,
            "yes" if p.required else "no",
            p.describe_default() or "-",
            p.kind,
            p.transform or "-",
        )
    console.console.print(table)
