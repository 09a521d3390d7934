"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from atelier.application.dto import ItemPlanSpec
from atelier.domain.exceptions import DomainException, PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn domain errors into click errors (exit code 1, message on stderr)."""
    try:
        yield
    except PersistenceError as exc:
        logger.error("Data store failure: %s", exc, exc_info=exc.__cause__)
        raise click.ClickException(
            "Could not access the data store; the operation was not completed."
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _int(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{raw}' for {what}.")


def parse_item_plans(raw: str) -> list[ItemPlanSpec]:
    """Parse 'Azul:7:10,Preto:3.5:8:#000000' into ItemPlanSpec list.

    Fields are color, rolls, pieces per size and an optional display hex.
    """
    specs: list[ItemPlanSpec] = []
    for chunk in raw.split(","):
        parts = [p.strip() for p in chunk.strip().split(":")]
        if len(parts) not in (3, 4):
            raise click.BadParameter(
                f"Invalid item format '{chunk.strip()}'. Expected 'Color:Rolls:PiecesPerSize'."
            )
        color, rolls, pieces = parts[:3]
        specs.append(
            ItemPlanSpec(
                color=color,
                rolls=rolls,
                pieces_per_size=_int(pieces, color),
                color_hex=parts[3] if len(parts) == 4 else "",
            )
        )
    return specs


def parse_size_map(raw: str) -> dict[str, dict[str, int]]:
    """Parse 'Azul=P:10,M:5;Preto=G:3' into {color: {size: qty}}."""
    result: dict[str, dict[str, int]] = {}
    for group in raw.split(";"):
        group = group.strip()
        if not group:
            continue
        if "=" not in group:
            raise click.BadParameter(
                f"Invalid size group '{group}'. Expected 'Color=Size:Qty,Size:Qty'."
            )
        color, sizes_raw = group.split("=", 1)
        sizes: dict[str, int] = {}
        for pair in sizes_raw.split(","):
            pair = pair.strip()
            if ":" not in pair:
                raise click.BadParameter(f"Invalid size '{pair}'. Expected 'Size:Qty'.")
            size, qty = pair.rsplit(":", 1)
            sizes[size.strip()] = _int(qty.strip(), f"{color.strip()} {size.strip()}")
        result[color.strip()] = sizes
    return result


def parse_colors(raw: str | None) -> list[tuple[str, str]] | None:
    """Parse 'Azul:#0000ff,Preto' into (name, hex) pairs."""
    if raw is None:
        return None
    colors = []
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        name, _, hex_ = chunk.partition(":")
        colors.append((name.strip(), hex_.strip()))
    return colors


def format_sizes(sizes: dict[str, int] | None) -> str:
    if not sizes:
        return "-"
    return " ".join(f"{size}:{qty}" for size, qty in sizes.items())
