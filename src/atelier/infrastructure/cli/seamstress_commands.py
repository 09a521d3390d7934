"""CLI commands for the seamstress roster."""

from __future__ import annotations

import click

from atelier.application.manage_seamstress import (
    RegisterSeamstressHandler,
    UpdateSeamstressHandler,
)
from atelier.infrastructure.bootstrap import Container
from atelier.infrastructure.cli.common import reporting_errors


@click.command("add")
@click.option("--name", required=True, help="Full name.")
@click.option("--phone", default="", help="Phone number.")
@click.option("--specialty", default="", help="Specialty (e.g. jeans).")
@click.option("--address", default="", help="Address.")
@click.option("--city", default="", help="City.")
@click.pass_obj
def seamstress_add(
    container: Container,
    name: str,
    phone: str,
    specialty: str,
    address: str,
    city: str,
) -> None:
    """Register a seamstress."""
    with reporting_errors():
        handler = RegisterSeamstressHandler(container.seamstress_repository())
        seamstress = handler.handle(
            name, phone=phone, specialty=specialty, address=address, city=city
        )
    click.echo(f"Seamstress #{seamstress.id} '{seamstress.name}' registered")


@click.command("list")
@click.pass_obj
def seamstress_list(container: Container) -> None:
    """List the roster."""
    with reporting_errors():
        roster = container.seamstress_repository().list_all()

    if not roster:
        click.echo("No seamstresses found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Specialty':<14} {'City':<14} Active")
    click.echo("-" * 62)
    for s in roster:
        click.echo(
            f"{s.id:<6} {s.name:<20} {s.specialty:<14} {s.city:<14} "
            f"{'yes' if s.active else 'no'}"
        )


@click.command("update")
@click.option("--id", "seamstress_id", required=True, help="Seamstress ID.")
@click.option("--name", default=None)
@click.option("--phone", default=None)
@click.option("--specialty", default=None)
@click.option("--address", default=None)
@click.option("--city", default=None)
@click.pass_obj
def seamstress_update(container: Container, seamstress_id: str, **contact: str | None) -> None:
    """Update contact details."""
    with reporting_errors():
        UpdateSeamstressHandler(container.seamstress_repository()).handle(
            seamstress_id, **contact
        )
    click.echo(f"Seamstress #{seamstress_id} updated")


@click.command("deactivate")
@click.option("--id", "seamstress_id", required=True, help="Seamstress ID.")
@click.pass_obj
def seamstress_deactivate(container: Container, seamstress_id: str) -> None:
    """Take a seamstress off the active roster."""
    with reporting_errors():
        s = UpdateSeamstressHandler(container.seamstress_repository()).set_active(
            seamstress_id, False
        )
    click.echo(f"Seamstress #{s.id} '{s.name}' deactivated")


@click.command("activate")
@click.option("--id", "seamstress_id", required=True, help="Seamstress ID.")
@click.pass_obj
def seamstress_activate(container: Container, seamstress_id: str) -> None:
    """Put a seamstress back on the active roster."""
    with reporting_errors():
        s = UpdateSeamstressHandler(container.seamstress_repository()).set_active(
            seamstress_id, True
        )
    click.echo(f"Seamstress #{s.id} '{s.name}' activated")
