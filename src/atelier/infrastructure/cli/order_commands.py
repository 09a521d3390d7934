"""CLI commands for the production order lifecycle."""

from __future__ import annotations

import click

from atelier.application.confirm_cut import ConfirmCutHandler
from atelier.application.create_order import CreateOrderHandler
from atelier.application.delete_order import DeleteOrderHandler
from atelier.application.distribute_order import DistributeOrderHandler
from atelier.application.dto import OrderDTO
from atelier.application.finish_split import FinishSplitHandler
from atelier.application.revise_order import ReviseOrderHandler
from atelier.application.show_order import ListOrdersHandler, ShowOrderHandler
from atelier.application.start_cutting import StartCuttingHandler
from atelier.infrastructure.bootstrap import Container
from atelier.infrastructure.cli.common import (
    format_sizes,
    parse_item_plans,
    parse_size_map,
    reporting_errors,
)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Reference: {dto.reference_code} — {dto.description}")
    click.echo(f"Fabric:    {dto.fabric}   Grid: {dto.grid}")
    click.echo(f"Created:   {dto.created_at}")
    if dto.finished_at:
        click.echo(f"Finished:  {dto.finished_at}")
    if dto.notes:
        click.echo(f"Notes:     {dto.notes}")
    click.echo()

    click.echo(f"  {'Color':<14} {'Rolls':>7} {'Est.':>6} {'Cut':>6}  Cut sizes")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.color:<14} {item.rolls_used:>7} {item.estimated_pieces:>6} "
            f"{item.actual_pieces:>6}  {format_sizes(item.cut_sizes)}"
        )

    if dto.cutting:
        click.echo()
        click.echo(f"  At the cutting table ({dto.cutting_stock_pieces} pieces)")
        for item in dto.cutting:
            marker = " (exhausted)" if item.actual_pieces == 0 else ""
            click.echo(f"    {item.color:<14} {format_sizes(item.sizes)}{marker}")

    if dto.splits:
        click.echo()
        click.echo("  Splits")
        for split in dto.splits:
            click.echo(
                f"    {split.id}  {split.seamstress_name:<16} {split.status:<9} "
                f"{split.actual_pieces:>5} pcs  sent {split.created_at}"
            )
            for color, sizes in split.sizes_by_color.items():
                click.echo(f"        {color:<14} {format_sizes(sizes)}")


@click.command("create")
@click.option("--reference", "reference_id", required=True, help="Product reference ID.")
@click.option("--items", required=True, help="Colors as 'Color:Rolls:PiecesPerSize,...'.")
@click.option("--fabric", default="", help="Fabric name (defaults to the reference's).")
@click.option("--id", "order_id", default=None, help="Order number (next free one if omitted).")
@click.option("--grid", default=None, help="Size grid (defaults to the reference's).")
@click.option("--notes", default="", help="Free-text notes.")
@click.pass_obj
def order_create(
    container: Container,
    reference_id: str,
    items: str,
    fabric: str,
    order_id: str | None,
    grid: str | None,
    notes: str,
) -> None:
    """Plan a new production order."""
    specs = parse_item_plans(items)
    with reporting_errors():
        handler = CreateOrderHandler(
            order_repo=container.order_repository(),
            product_repo=container.product_repository(),
        )
        dto = handler.handle(
            reference_id=reference_id,
            item_specs=specs,
            fabric=fabric,
            order_id=order_id,
            grid=grid,
            notes=notes,
        )

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="PLANNED, CUTTING, SEWING or FINISHED.")
@click.option("--search", "term", default="", help="Match reference, description or id.")
@click.pass_obj
def order_list(container: Container, status: str | None, term: str) -> None:
    """List orders, newest first."""
    with reporting_errors():
        orders = ListOrdersHandler(container.order_repository()).handle(status, term)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<8} {'Reference':<14} {'Fabric':<14} {'Status':<9} {'Est.':>6} {'Table':>6}")
    click.echo("-" * 62)
    for o in orders:
        click.echo(
            f"{o.id:<8} {o.reference_code:<14} {o.fabric:<14} {o.status:<9} "
            f"{o.estimated_pieces:>6} {o.cutting_stock_pieces:>6}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: str) -> None:
    """Show details of an existing order."""
    with reporting_errors():
        dto = ShowOrderHandler(container.order_repository()).handle(order_id)
    _display_order(dto)


@click.command("plan")
@click.option("--id", "order_id", required=True, help="Order ID to revise.")
@click.option("--items", required=True, help="Colors as 'Color:Rolls:PiecesPerSize,...'.")
@click.option("--fabric", default=None, help="New fabric name.")
@click.option("--notes", default=None, help="New notes.")
@click.pass_obj
def order_plan(
    container: Container,
    order_id: str,
    items: str,
    fabric: str | None,
    notes: str | None,
) -> None:
    """Revise the colors of an order that is still planned."""
    specs = parse_item_plans(items)
    with reporting_errors():
        ReviseOrderHandler(container.order_repository()).handle(
            order_id, specs, fabric=fabric, notes=notes
        )
    click.echo(f"Order {order_id} revised.")


@click.command("cut")
@click.option("--id", "order_id", required=True, help="Order ID to send to cutting.")
@click.pass_obj
def order_cut(container: Container, order_id: str) -> None:
    """Move a planned order to cutting (draws fabric stock)."""
    with reporting_errors():
        handler = StartCuttingHandler(
            order_repo=container.order_repository(),
            fabric_repo=container.fabric_repository(),
            policy=container.stock_policy,
        )
        handler.handle(order_id)
    click.echo(f"Order {order_id} moved to cutting — fabric stock updated.")


@click.command("confirm-cut")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--sizes", required=True, help="Cut pieces as 'Color=P:10,M:10;Color=...'.")
@click.pass_obj
def order_confirm_cut(container: Container, order_id: str, sizes: str) -> None:
    """Record the pieces actually cut."""
    cut = parse_size_map(sizes)
    with reporting_errors():
        dto = ConfirmCutHandler(container.order_repository()).handle(order_id, cut)
    click.echo(f"Cut confirmed — {dto.cutting_stock_pieces} pieces at the cutting table.")


@click.command("distribute")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--seamstress", "seamstress_id", required=True, help="Seamstress ID.")
@click.option("--sizes", required=True, help="Pieces to send as 'Color=P:10,M:5;...'.")
@click.pass_obj
def order_distribute(
    container: Container, order_id: str, seamstress_id: str, sizes: str
) -> None:
    """Send cut pieces to a seamstress."""
    request = parse_size_map(sizes)
    with reporting_errors():
        handler = DistributeOrderHandler(
            order_repo=container.order_repository(),
            seamstress_repo=container.seamstress_repository(),
        )
        split = handler.handle(order_id, seamstress_id, request)
    click.echo(
        f"Split {split.id} — {split.actual_pieces} pieces sent to {split.seamstress_name}."
    )


@click.command("finish-split")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--split", "split_id", required=True, help="Split ID.")
@click.pass_obj
def order_finish_split(container: Container, order_id: str, split_id: str) -> None:
    """Mark a seamstress's packet as sewn."""
    with reporting_errors():
        status = FinishSplitHandler(container.order_repository()).handle(order_id, split_id)
    click.echo(f"Split {split_id} finished — order {order_id} is {status.value}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.confirmation_option(prompt="Delete this order?")
@click.pass_obj
def order_delete(container: Container, order_id: str) -> None:
    """Delete an order (fabric already drawn is not returned)."""
    with reporting_errors():
        DeleteOrderHandler(container.order_repository()).handle(order_id)
    click.echo(f"Order {order_id} deleted.")
