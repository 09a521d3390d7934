"""CLI commands for dashboard figures."""

from __future__ import annotations

from datetime import datetime

import click

from atelier.application.production_report import (
    DashboardHandler,
    ProductionReportHandler,
)
from atelier.infrastructure.bootstrap import Container
from atelier.infrastructure.cli.common import reporting_errors


@click.command("dashboard")
@click.pass_obj
def report_dashboard(container: Container) -> None:
    """Headline production figures."""
    with reporting_errors():
        handler = DashboardHandler(
            container.order_repository(), container.seamstress_repository()
        )
        summary = handler.handle()

    click.echo(f"Orders:                {summary.total_orders}")
    for status, count in summary.by_status.items():
        click.echo(f"  {status.value:<20} {count}")
    click.echo(f"Packets being sewn:    {summary.sewing_packets}")
    click.echo(f"Seamstresses sewing:   {summary.seamstresses_sewing}")
    click.echo(f"At the cutting table:  {summary.cutting_stock_pieces} pcs")
    click.echo(f"Produced this month:   {summary.month_pieces} pcs")
    click.echo(f"Produced overall:      {summary.total_pieces} pcs")
    if summary.idle:
        click.echo("Idle: " + ", ".join(s.name for s in summary.idle))


@click.command("seamstresses")
@click.pass_obj
def report_seamstresses(container: Container) -> None:
    """Workload and output per seamstress."""
    with reporting_errors():
        handler = DashboardHandler(
            container.order_repository(), container.seamstress_repository()
        )
        stats = handler.seamstresses()

    if not stats:
        click.echo("No seamstresses found.")
        return

    click.echo(f"{'Name':<20} {'Sewing':>7} {'Done':>6} {'Pieces':>8}")
    click.echo("-" * 46)
    for s in stats:
        idle = "  idle" if s.is_idle else ""
        click.echo(f"{s.name:<20} {s.in_progress:>7} {s.finished:>6} {s.produced:>8}{idle}")


@click.command("production")
@click.option(
    "--period",
    type=click.Choice(["day", "week", "month"]),
    default=None,
    help="Restrict to the day/week/month containing --on.",
)
@click.option("--on", "on", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--seamstress", "seamstress_id", default=None, help="Seamstress ID.")
@click.option("--fabric", default=None, help="Fabric name.")
@click.pass_obj
def report_production(
    container: Container,
    period: str | None,
    on: datetime | None,
    seamstress_id: str | None,
    fabric: str | None,
) -> None:
    """Pieces finished by seamstresses."""
    with reporting_errors():
        handler = ProductionReportHandler(container.order_repository())
        total = handler.pieces(
            period=period,
            on=on.date() if on else None,
            seamstress_id=seamstress_id,
            fabric=fabric,
        )
    click.echo(f"{total} pieces")


@click.command("trend")
@click.option("--days", default=7, type=int, help="Daily buckets to show.")
@click.option("--months", default=6, type=int, help="Monthly buckets to show.")
@click.pass_obj
def report_trend(container: Container, days: int, months: int) -> None:
    """Pieces finished per day and per month."""
    with reporting_errors():
        handler = ProductionReportHandler(container.order_repository())
        daily = handler.daily(days)
        monthly = handler.monthly(months)

    click.echo("Per day")
    for day, pieces in daily:
        click.echo(f"  {day:%d/%m}  {pieces:>6}")
    click.echo("Per month")
    for first, pieces in monthly:
        click.echo(f"  {first:%Y-%m}  {pieces:>6}")
