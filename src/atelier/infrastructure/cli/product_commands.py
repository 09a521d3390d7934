"""CLI commands for the product reference catalog."""

from __future__ import annotations

import click

from atelier.application.add_product import AddProductHandler
from atelier.application.update_product import DeleteProductHandler, UpdateProductHandler
from atelier.infrastructure.bootstrap import Container
from atelier.infrastructure.cli.common import parse_colors, reporting_errors


@click.command("add")
@click.option("--code", required=True, help="Reference code (e.g. REF-102).")
@click.option("--description", default="", help="Description.")
@click.option("--fabric", default="", help="Default fabric name.")
@click.option("--colors", default=None, help="Default colors as 'Azul:#1e3a8a,Preto'.")
@click.option("--pieces-per-roll", default=0, type=int, help="Estimated pieces per roll.")
@click.option("--grid", default="STANDARD", help="Default size grid.")
@click.pass_obj
def product_add(
    container: Container,
    code: str,
    description: str,
    fabric: str,
    colors: str | None,
    pieces_per_roll: int,
    grid: str,
) -> None:
    """Add a new reference to the catalog."""
    with reporting_errors():
        handler = AddProductHandler(container.product_repository())
        product = handler.handle(
            code=code,
            description=description,
            default_fabric=fabric,
            colors=parse_colors(colors),
            pieces_per_roll=pieces_per_roll,
            grid=grid,
        )
    click.echo(f"Reference #{product.id} '{product.code}' added")


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all references in the catalog."""
    with reporting_errors():
        products = container.product_repository().list_all()

    if not products:
        click.echo("No references found.")
        return

    click.echo(f"{'ID':<6} {'Code':<12} {'Fabric':<14} {'Grid':<9} {'Pcs/roll':>8}  Colors")
    click.echo("-" * 70)
    for p in products:
        colors = ", ".join(c.name for c in p.default_colors) or "-"
        click.echo(
            f"{p.id:<6} {p.code:<12} {p.default_fabric:<14} {p.default_grid:<9} "
            f"{p.estimated_pieces_per_roll:>8}  {colors}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Reference ID.")
@click.option("--code", default=None, help="New code.")
@click.option("--description", default=None, help="New description.")
@click.option("--fabric", default=None, help="New default fabric.")
@click.option("--colors", default=None, help="New default colors.")
@click.option("--pieces-per-roll", default=None, type=int, help="New estimate.")
@click.option("--grid", default=None, help="New default size grid.")
@click.pass_obj
def product_update(
    container: Container,
    product_id: str,
    code: str | None,
    description: str | None,
    fabric: str | None,
    colors: str | None,
    pieces_per_roll: int | None,
    grid: str | None,
) -> None:
    """Update a catalog reference."""
    with reporting_errors():
        handler = UpdateProductHandler(container.product_repository())
        handler.handle(
            product_id,
            code=code,
            description=description,
            default_fabric=fabric,
            colors=parse_colors(colors),
            pieces_per_roll=pieces_per_roll,
            grid=grid,
        )
    click.echo(f"Reference #{product_id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Reference ID.")
@click.confirmation_option(prompt="Delete this reference?")
@click.pass_obj
def product_delete(container: Container, product_id: str) -> None:
    """Remove a reference from the catalog."""
    with reporting_errors():
        DeleteProductHandler(container.product_repository()).handle(product_id)
    click.echo(f"Reference #{product_id} deleted")
