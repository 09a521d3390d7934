"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import ProductionOrder

_STAMP = "%Y-%m-%d %H:%M UTC"


def _stamp(value: datetime | None) -> str | None:
    return value.strftime(_STAMP) if value is not None else None


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class ItemPlanSpec:
    """Input: one planned color (rolls to cut, pieces per size)."""

    color: str
    rolls: str
    pieces_per_size: int
    color_hex: str = ""


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    color: str
    rolls_used: str
    estimated_pieces: int
    actual_pieces: int
    estimated_sizes: dict[str, int]
    cut_sizes: dict[str, int] | None


@dataclass(frozen=True)
class CuttingItemDTO:
    color: str
    sizes: dict[str, int]
    actual_pieces: int


@dataclass(frozen=True)
class SplitDTO:
    id: str
    seamstress_id: str
    seamstress_name: str
    status: str
    sizes_by_color: dict[str, dict[str, int]]
    actual_pieces: int
    created_at: str
    finished_at: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    reference_code: str
    description: str
    fabric: str
    grid: str
    status: str
    notes: str
    items: list[OrderItemDTO]
    cutting: list[CuttingItemDTO]
    splits: list[SplitDTO]
    estimated_pieces: int
    cutting_stock_pieces: int
    created_at: str
    finished_at: str | None


@dataclass(frozen=True)
class FabricDTO:
    id: str
    name: str
    color: str
    color_hex: str
    stock: str
    notes: str
    updated_at: str


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: ProductionOrder) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        reference_code=order.reference_code,
        description=order.description,
        fabric=order.fabric,
        grid=order.grid,
        status=order.status.value,
        notes=order.notes,
        items=[
            OrderItemDTO(
                color=item.color,
                rolls_used=str(item.rolls_used),
                estimated_pieces=item.estimated_pieces,
                actual_pieces=item.actual_pieces,
                estimated_sizes=item.estimated_sizes.as_dict(),
                cut_sizes=item.cut_sizes.as_dict() if item.cut_sizes is not None else None,
            )
            for item in order.items
        ],
        cutting=[
            CuttingItemDTO(
                color=item.color,
                sizes=item.sizes.as_dict(),
                actual_pieces=item.actual_pieces,
            )
            for item in order.active_cutting_items
        ],
        splits=[
            SplitDTO(
                id=split.id,
                seamstress_id=split.seamstress_id,
                seamstress_name=split.seamstress_name,
                status=split.status.value,
                sizes_by_color={i.color: i.sizes.as_dict() for i in split.items},
                actual_pieces=split.actual_pieces,
                created_at=_stamp(split.created_at) or "",
                finished_at=_stamp(split.finished_at),
            )
            for split in order.splits
        ],
        estimated_pieces=order.estimated_pieces,
        cutting_stock_pieces=order.cutting_stock_pieces,
        created_at=_stamp(order.created_at) or "",
        finished_at=_stamp(order.finished_at),
    )


def fabric_to_dto(fabric: Fabric) -> FabricDTO:
    return FabricDTO(
        id=fabric.id or "",
        name=fabric.name,
        color=fabric.color,
        color_hex=fabric.color_hex,
        stock=str(fabric.stock),
        notes=fabric.notes,
        updated_at=_stamp(fabric.updated_at) or "",
    )
