from __future__ import annotations

from pathlib import Path

import click
import pydantic

from atelier.infrastructure.bootstrap import build_container, configure_logging
from atelier.infrastructure.cli.fabric_commands import (
    fabric_add,
    fabric_edit,
    fabric_list,
    fabric_stock_in,
)
from atelier.infrastructure.cli.order_commands import (
    order_confirm_cut,
    order_create,
    order_cut,
    order_delete,
    order_distribute,
    order_finish_split,
    order_list,
    order_plan,
    order_show,
)
from atelier.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from atelier.infrastructure.cli.report_commands import (
    report_dashboard,
    report_production,
    report_seamstresses,
    report_trend,
)
from atelier.infrastructure.cli.seamstress_commands import (
    seamstress_activate,
    seamstress_add,
    seamstress_deactivate,
    seamstress_list,
    seamstress_update,
)
from atelier.infrastructure.settings import Settings


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the record files (overrides ATELIER_DATA_DIR).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log lifecycle events.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Atelier — garment production tracker"""
    try:
        settings = Settings()
    except pydantic.ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()
        )
        raise click.ClickException(f"Invalid configuration: {problems}")
    configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = build_container(settings, data_dir)


@cli.group()
def order() -> None:
    """Plan, cut, distribute and finish production orders."""


@cli.group()
def fabric() -> None:
    """Manage fabric stock."""


@cli.group()
def product() -> None:
    """Manage product references."""


@cli.group()
def seamstress() -> None:
    """Manage the seamstress roster."""


@cli.group()
def report() -> None:
    """Dashboard figures."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_plan)
order.add_command(order_cut)
order.add_command(order_confirm_cut)
order.add_command(order_distribute)
order.add_command(order_finish_split)
order.add_command(order_delete)
fabric.add_command(fabric_add)
fabric.add_command(fabric_list)
fabric.add_command(fabric_stock_in)
fabric.add_command(fabric_edit)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_delete)
seamstress.add_command(seamstress_add)
seamstress.add_command(seamstress_list)
seamstress.add_command(seamstress_update)
seamstress.add_command(seamstress_deactivate)
seamstress.add_command(seamstress_activate)
report.add_command(report_dashboard)
report.add_command(report_seamstresses)
report.add_command(report_production)
report.add_command(report_trend)
