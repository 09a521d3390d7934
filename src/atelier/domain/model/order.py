"""ProductionOrder aggregate — the core of the domain.

The order is an aggregate root that owns its color items, the pool of cut
pieces still waiting at the cutting table, and the splits handed out to
seamstresses. Every lifecycle rule lives here:

    PLANNED -> CUTTING -> SEWING -> FINISHED

Status only ever moves forward. Fabric stock is a separate aggregate; the
cutting transition is coordinated with it by the fabric ledger service.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.product import ProductReference
from atelier.domain.model.seamstress import Seamstress
from atelier.domain.model.value_objects import (
    DEFAULT_GRID,
    Rolls,
    SizeBreakdown,
    grid_sizes,
)


class OrderStatus(Enum):
    PLANNED = "PLANNED"
    CUTTING = "CUTTING"
    SEWING = "SEWING"
    FINISHED = "FINISHED"

    @property
    def rank(self) -> int:
        return _PIPELINE.index(self)


_PIPELINE = [
    OrderStatus.PLANNED,
    OrderStatus.CUTTING,
    OrderStatus.SEWING,
    OrderStatus.FINISHED,
]


class SplitStatus(Enum):
    SEWING = "SEWING"
    FINISHED = "FINISHED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _same_color(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


# ---------------------------------------------------------------------------
# Owned records
# ---------------------------------------------------------------------------


@dataclass
class OrderItem:
    """One color of an order: what was planned and, later, what was cut.

    The estimate fields never change after planning. ``cut_sizes`` is
    filled in when the cut is confirmed.
    """

    color: str
    rolls_used: Rolls
    pieces_per_size: int
    estimated_sizes: SizeBreakdown
    color_hex: str = "#cccccc"
    cut_sizes: SizeBreakdown | None = None

    @staticmethod
    def plan(
        color: str,
        rolls_used: Rolls,
        pieces_per_size: int,
        grid: str = DEFAULT_GRID,
        color_hex: str = "#cccccc",
    ) -> OrderItem:
        if not color or not color.strip():
            raise ValidationError("Item color is required")
        if pieces_per_size < 0:
            raise ValidationError(
                f"Pieces per size for {color} cannot be negative"
            )
        return OrderItem(
            color=color.strip(),
            rolls_used=rolls_used,
            pieces_per_size=pieces_per_size,
            estimated_sizes=SizeBreakdown.uniform(grid_sizes(grid), pieces_per_size),
            color_hex=color_hex or "#cccccc",
        )

    @property
    def estimated_pieces(self) -> int:
        return self.estimated_sizes.total

    @property
    def actual_pieces(self) -> int:
        return self.cut_sizes.total if self.cut_sizes is not None else 0

    @property
    def is_cut(self) -> bool:
        return self.cut_sizes is not None


@dataclass
class CuttingItem:
    """Cut pieces of one color not yet handed to any seamstress."""

    color: str
    sizes: SizeBreakdown
    color_hex: str = "#cccccc"

    @property
    def actual_pieces(self) -> int:
        return self.sizes.total

    @property
    def is_exhausted(self) -> bool:
        return self.sizes.is_empty


@dataclass(frozen=True)
class SplitItem:
    color: str
    sizes: SizeBreakdown
    color_hex: str = "#cccccc"

    @property
    def actual_pieces(self) -> int:
        return self.sizes.total


@dataclass
class OrderSplit:
    """One work packet given to one seamstress.

    Only ``status`` and ``finished_at`` change after creation.
    """

    id: str
    seamstress_id: str
    seamstress_name: str
    items: tuple[SplitItem, ...]
    status: SplitStatus = SplitStatus.SEWING
    created_at: datetime = field(default_factory=_utcnow)
    finished_at: datetime | None = None

    @property
    def actual_pieces(self) -> int:
        return sum(item.actual_pieces for item in self.items)

    @property
    def is_finished(self) -> bool:
        return self.status == SplitStatus.FINISHED

    def pieces_for(self, color: str) -> int:
        return sum(i.actual_pieces for i in self.items if _same_color(i.color, color))

    def finish(self, now: datetime) -> None:
        if self.is_finished:
            raise ValidationError(f"Split {self.id} is already finished")
        self.status = SplitStatus.FINISHED
        self.finished_at = now


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------


@dataclass
class ProductionOrder:
    """Aggregate root for production orders.

    New orders go through ``ProductionOrder.create()``, which checks the
    planning rules. The plain constructor is what the repository uses to
    rebuild stored orders as they are.
    """

    id: str
    reference_id: str
    reference_code: str
    fabric: str
    items: list[OrderItem]
    description: str = ""
    grid: str = DEFAULT_GRID
    notes: str = ""
    status: OrderStatus = OrderStatus.PLANNED
    active_cutting_items: list[CuttingItem] = field(default_factory=list)
    splits: list[OrderSplit] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    finished_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        reference: ProductReference,
        fabric: str,
        items: list[OrderItem],
        grid: str | None = None,
        notes: str = "",
        created_at: datetime | None = None,
    ) -> ProductionOrder:
        """Plan a new order, enforcing all invariants."""
        if not order_id or not order_id.strip():
            raise ValidationError("Order id is required")
        if reference.id is None:
            raise ValidationError("A saved product reference is required")

        fabric_name = (fabric or reference.default_fabric).strip()
        if not fabric_name:
            raise ValidationError("Fabric is required")

        _check_items(items)
        stamp = created_at or _utcnow()
        return ProductionOrder(
            id=order_id.strip(),
            reference_id=reference.id,
            reference_code=reference.code,
            description=reference.description or reference.code,
            fabric=fabric_name,
            items=list(items),
            grid=(grid or reference.default_grid).upper(),
            notes=notes,
            created_at=stamp,
            updated_at=stamp,
        )

    def revise_plan(
        self,
        fabric: str,
        items: list[OrderItem],
        notes: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Replace the planned colors while nothing has been cut yet."""
        if self.status != OrderStatus.PLANNED:
            raise ValidationError(
                f"Cannot revise order {self.id} — current status is "
                f"{self.status.value}, expected PLANNED"
            )
        if not fabric or not fabric.strip():
            raise ValidationError("Fabric is required")
        _check_items(items)
        self.fabric = fabric.strip()
        self.items = list(items)
        if notes is not None:
            self.notes = notes
        self.updated_at = now or _utcnow()

    # --- State transitions ----------------------------------------------------

    def start_cutting(self, now: datetime | None = None) -> None:
        """Transition PLANNED -> CUTTING.

        Fabric consumption must happen *before* calling this (coordinated
        by the application handler via the fabric ledger).
        """
        if self.status != OrderStatus.PLANNED:
            raise ValidationError(
                f"Cannot start cutting order {self.id} — current status is "
                f"{self.status.value}, expected PLANNED"
            )
        self._advance(OrderStatus.CUTTING, now)

    def confirm_cut(
        self,
        cut: dict[str, SizeBreakdown],
        now: datetime | None = None,
    ) -> None:
        """Record the pieces actually cut, per color and size.

        Seeds the cutting pool with the same quantities. Colors left out of
        *cut* are recorded as cut to zero. Allowed again until the first
        distribution, after which the cut is locked.
        """
        if self.splits:
            raise ValidationError(
                f"Cut for order {self.id} is locked — pieces were already distributed"
            )
        if self.status != OrderStatus.CUTTING:
            raise ValidationError(
                f"Cannot confirm cut for order {self.id} — current status is "
                f"{self.status.value}, expected CUTTING"
            )
        if not cut:
            raise ValidationError("Must specify the cut quantities of at least one color")

        realized: dict[int, SizeBreakdown] = {}
        for color, sizes in cut.items():
            index = self._item_index(color)
            if index in realized:
                raise ValidationError(f"Color {color} listed twice")
            realized[index] = sizes

        sizes_of_grid = grid_sizes(self.grid)
        pool: list[CuttingItem] = []
        for index, item in enumerate(self.items):
            sizes = realized.get(index, SizeBreakdown.uniform(sizes_of_grid, 0))
            item.cut_sizes = sizes
            pool.append(CuttingItem(color=item.color, sizes=sizes, color_hex=item.color_hex))

        self.active_cutting_items = pool
        self.updated_at = now or _utcnow()

    def distribute(
        self,
        seamstress: Seamstress,
        request: dict[str, SizeBreakdown],
        split_id: str | None = None,
        now: datetime | None = None,
    ) -> OrderSplit:
        """Hand cut pieces to a seamstress as a new split.

        Per size, at most what remains in the pool is transferred; excess
        requests are capped. The split records exactly what moved.
        Promotes CUTTING -> SEWING.
        """
        if self.status not in (OrderStatus.CUTTING, OrderStatus.SEWING):
            raise ValidationError(
                f"Cannot distribute order {self.id} in {self.status.value} status"
            )
        if not self.has_confirmed_cut:
            raise ValidationError(
                f"Order {self.id} has no confirmed cut to distribute"
            )
        if not seamstress.active:
            raise ValidationError(f"Seamstress '{seamstress.name}' is inactive")
        if seamstress.id is None:
            raise ValidationError("A saved seamstress is required")
        if not request:
            raise ValidationError("Must specify at least one color to distribute")

        # Phase 1: compute every transfer before touching the pool
        transfers: list[tuple[CuttingItem, SizeBreakdown, SizeBreakdown]] = []
        touched: set[int] = set()
        for color, wanted in request.items():
            index = self._cutting_index(color)
            if index in touched:
                raise ValidationError(f"Color {color} listed twice")
            touched.add(index)
            pool_item = self.active_cutting_items[index]
            taken, remaining = pool_item.sizes.take(wanted)
            transfers.append((pool_item, taken, remaining))

        split_items = tuple(
            SplitItem(color=p.color, sizes=taken, color_hex=p.color_hex)
            for p, taken, _ in transfers
            if not taken.is_empty
        )
        if not split_items:
            raise ValidationError(
                f"Nothing left to distribute for the requested colors of order {self.id}"
            )

        # Phase 2: apply
        stamp = now or _utcnow()
        for pool_item, _, remaining in transfers:
            pool_item.sizes = remaining

        split = OrderSplit(
            id=split_id or uuid.uuid4().hex,
            seamstress_id=seamstress.id,
            seamstress_name=seamstress.name,
            items=split_items,
            created_at=stamp,
        )
        self.splits.append(split)
        self._advance(OrderStatus.SEWING, stamp)
        return split

    def finish_split(self, split_id: str, now: datetime | None = None) -> OrderSplit:
        """Mark one split FINISHED and close the order if nothing is left.

        The order becomes FINISHED only when every split is finished and the
        cutting pool is empty for every color.
        """
        split = self._find_split(split_id)
        stamp = now or _utcnow()
        split.finish(stamp)
        self.updated_at = stamp

        if self.is_complete:
            self._advance(OrderStatus.FINISHED, stamp)
            self.finished_at = stamp
        return split

    # --- Computed properties --------------------------------------------------

    @property
    def has_confirmed_cut(self) -> bool:
        return bool(self.active_cutting_items)

    @property
    def cutting_stock_pieces(self) -> int:
        """Pieces still waiting at the cutting table."""
        return sum(item.actual_pieces for item in self.active_cutting_items)

    @property
    def is_fully_distributed(self) -> bool:
        return self.has_confirmed_cut and all(
            item.is_exhausted for item in self.active_cutting_items
        )

    @property
    def is_complete(self) -> bool:
        return (
            bool(self.splits)
            and all(split.is_finished for split in self.splits)
            and self.is_fully_distributed
        )

    @property
    def estimated_pieces(self) -> int:
        return sum(item.estimated_pieces for item in self.items)

    @property
    def total_rolls(self) -> Rolls:
        total = Rolls.of(0)
        for item in self.items:
            total = total + item.rolls_used
        return total

    def distributed_pieces(self, color: str) -> int:
        return sum(split.pieces_for(color) for split in self.splits)

    def remaining_pieces(self, color: str) -> int:
        for item in self.active_cutting_items:
            if _same_color(item.color, color):
                return item.actual_pieces
        return 0

    # --- Internal helpers -----------------------------------------------------

    def _advance(self, target: OrderStatus, now: datetime | None) -> None:
        if target.rank < self.status.rank:
            raise ValidationError(
                f"Order {self.id} cannot move back from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target
        self.updated_at = now or _utcnow()

    def _item_index(self, color: str) -> int:
        for index, item in enumerate(self.items):
            if _same_color(item.color, color):
                return index
        raise ValidationError(f"Color '{color}' is not part of order {self.id}")

    def _cutting_index(self, color: str) -> int:
        for index, item in enumerate(self.active_cutting_items):
            if _same_color(item.color, color):
                return index
        raise ValidationError(
            f"Color '{color}' has no cut pieces in order {self.id}"
        )

    def _find_split(self, split_id: str) -> OrderSplit:
        for split in self.splits:
            if split.id == split_id:
                return split
        raise EntityNotFoundError(f"Split '{split_id}' not found in order {self.id}")


def _check_items(items: list[OrderItem]) -> None:
    if not items:
        raise ValidationError("Order must contain at least one color")
    colors = [item.color.strip().lower() for item in items]
    if len(colors) != len(set(colors)):
        raise ValidationError("Each color may appear only once per order")
