"""Pydantic schemas for what the record store holds.

Row models describe one flat record per entity. Structured sub-entities
(order items, cutting pool, splits, product colors) are stored inside the
row as JSON strings; the ``*Record`` models validate those blobs when they
are read back.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter

NonNegativeDecimal = Annotated[Decimal, Field(ge=0, allow_inf_nan=False)]
Sizes = dict[str, NonNegativeInt]


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


# --- Blob records -------------------------------------------------------------


class ColorRecord(_Record):
    name: str
    hex: str = "#cccccc"


class OrderItemRecord(_Record):
    color: str
    color_hex: str = "#cccccc"
    rolls_used: NonNegativeDecimal = Decimal("0")
    pieces_per_size: NonNegativeInt = 0
    estimated_sizes: Sizes = Field(default_factory=dict)
    cut_sizes: Sizes | None = None


class CuttingItemRecord(_Record):
    color: str
    color_hex: str = "#cccccc"
    sizes: Sizes = Field(default_factory=dict)


class SplitItemRecord(_Record):
    color: str
    color_hex: str = "#cccccc"
    sizes: Sizes = Field(default_factory=dict)


class SplitRecord(_Record):
    id: str
    seamstress_id: str
    seamstress_name: str = ""
    status: Literal["SEWING", "FINISHED"] = "SEWING"
    items: list[SplitItemRecord] = Field(default_factory=list)
    created_at: datetime
    finished_at: datetime | None = None


COLORS = TypeAdapter(list[ColorRecord])
ORDER_ITEMS = TypeAdapter(list[OrderItemRecord])
CUTTING_ITEMS = TypeAdapter(list[CuttingItemRecord])
SPLITS = TypeAdapter(list[SplitRecord])


# --- Rows ---------------------------------------------------------------------


class OrderRow(_Record):
    id: str
    reference_id: str
    reference_code: str = ""
    description: str = ""
    fabric: str = ""
    grid: str = "STANDARD"
    status: Literal["PLANNED", "CUTTING", "SEWING", "FINISHED"]
    notes: str = ""
    items: Any = None
    active_cutting_items: Any = None
    splits: Any = None
    created_at: str
    updated_at: str | None = None
    finished_at: str | None = None


class FabricRow(_Record):
    id: str
    name: str
    color: str
    color_hex: str = "#cccccc"
    stock_rolls: NonNegativeDecimal = Decimal("0")
    notes: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class ProductRow(_Record):
    id: str
    code: str
    description: str = ""
    default_fabric: str = ""
    default_colors: Any = None
    default_grid: str = "STANDARD"
    estimated_pieces_per_roll: NonNegativeInt = 0


class SeamstressRow(_Record):
    id: str
    name: str
    phone: str = ""
    specialty: str = ""
    address: str = ""
    city: str = ""
    active: bool = True
