"""CLI commands for fabric stock."""

from __future__ import annotations

import click

from atelier.application.add_fabric_stock import AddFabricStockHandler
from atelier.application.register_fabric import EditFabricHandler, RegisterFabricHandler
from atelier.application.show_fabrics import ShowFabricsHandler
from atelier.infrastructure.bootstrap import Container
from atelier.infrastructure.cli.common import reporting_errors


@click.command("add")
@click.option("--name", required=True, help="Fabric name (e.g. Viscose).")
@click.option("--color", required=True, help="Color name (e.g. Azul).")
@click.option("--stock", default="0", help="Initial stock in rolls.")
@click.option("--hex", "color_hex", default="", help="Display color, e.g. #1e3a8a.")
@click.option("--notes", default="", help="Free-text notes.")
@click.pass_obj
def fabric_add(
    container: Container,
    name: str,
    color: str,
    stock: str,
    color_hex: str,
    notes: str,
) -> None:
    """Register a fabric/color pair."""
    with reporting_errors():
        handler = RegisterFabricHandler(container.fabric_repository())
        dto = handler.handle(name, color, stock=stock, color_hex=color_hex, notes=notes)
    click.echo(f"Fabric #{dto.id} {dto.name}/{dto.color} registered with {dto.stock} rolls")


@click.command("list")
@click.option("--name", default="", help="Filter by name substring.")
@click.option("--color", default="", help="Filter by color substring.")
@click.option("--min-stock", default=None, help="Only fabrics with at least this many rolls.")
@click.pass_obj
def fabric_list(
    container: Container, name: str, color: str, min_stock: str | None
) -> None:
    """Show fabric stock."""
    with reporting_errors():
        fabrics = ShowFabricsHandler(container.fabric_repository()).handle(
            name=name, color=color, min_stock=min_stock
        )

    if not fabrics:
        click.echo("No fabrics found.")
        return

    click.echo(f"{'ID':<6} {'Fabric':<16} {'Color':<12} {'Rolls':>8}  Updated")
    click.echo("-" * 64)
    for f in fabrics:
        click.echo(f"{f.id:<6} {f.name:<16} {f.color:<12} {f.stock:>8}  {f.updated_at}")


@click.command("stock-in")
@click.option("--id", "fabric_id", required=True, help="Fabric ID.")
@click.option("--rolls", required=True, help="Rolls received (e.g. 3.2 or 3,2).")
@click.pass_obj
def fabric_stock_in(container: Container, fabric_id: str, rolls: str) -> None:
    """Record rolls received into stock."""
    with reporting_errors():
        dto = AddFabricStockHandler(container.fabric_repository()).handle(fabric_id, rolls)
    click.echo(f"{dto.name}/{dto.color} now has {dto.stock} rolls")


@click.command("edit")
@click.option("--id", "fabric_id", required=True, help="Fabric ID.")
@click.option("--hex", "color_hex", default=None, help="New display color.")
@click.option("--notes", default=None, help="New notes.")
@click.pass_obj
def fabric_edit(
    container: Container, fabric_id: str, color_hex: str | None, notes: str | None
) -> None:
    """Edit the display color or notes of a fabric."""
    with reporting_errors():
        EditFabricHandler(container.fabric_repository()).handle(
            fabric_id, color_hex=color_hex, notes=notes
        )
    click.echo(f"Fabric #{fabric_id} updated")
