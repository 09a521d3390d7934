"""Domain service: Fabric Ledger.

Coordinates the cross-aggregate side effect of the cutting transition:
taking the rolls an order needs out of the shared fabric stock. The ledger
knows nothing about order status; the application handler calls it before
moving the order to CUTTING.

Consumption is two-phase (plan-then-mutate) so one order's cutting either
draws every color or none of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from atelier.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    Shortage,
)
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import ProductionOrder
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.fabric_repository import FabricRepository

logger = logging.getLogger(__name__)


class StockPolicy(Enum):
    """How the cutting transition treats missing fabric.

    STRICT refuses the whole transition when any color is short.
    CLAMP draws what it can, flooring stock at zero, and skips colors that
    have no fabric record at all.
    """

    STRICT = "STRICT"
    CLAMP = "CLAMP"


@dataclass(frozen=True)
class StockDraw:
    """Rolls to take out of one fabric record."""

    fabric: Fabric
    rolls: Rolls


def find_fabric(fabrics: list[Fabric], name: str, color: str) -> Fabric | None:
    for fabric in fabrics:
        if fabric.matches(name, color):
            return fabric
    return None


def plan_consumption(
    order: ProductionOrder,
    fabrics: list[Fabric],
    policy: StockPolicy = StockPolicy.STRICT,
) -> list[StockDraw]:
    """Work out which fabric records an order's cutting draws from.

    Pure: reads *fabrics* but never mutates them. Under STRICT, raises
    InsufficientStockError listing every short color.
    """
    draws: list[StockDraw] = []
    shortages: list[Shortage] = []

    for item in order.items:
        if item.rolls_used.is_zero:
            continue
        fabric = find_fabric(fabrics, order.fabric, item.color)
        if fabric is None:
            if policy is StockPolicy.STRICT:
                shortages.append(
                    Shortage(order.fabric, item.color, item.rolls_used.amount, Decimal("0"))
                )
            continue
        if policy is StockPolicy.STRICT and item.rolls_used > fabric.stock:
            shortages.append(
                Shortage(fabric.name, fabric.color, item.rolls_used.amount, fabric.stock.amount)
            )
            continue
        draws.append(StockDraw(fabric=fabric, rolls=item.rolls_used))

    if shortages:
        raise InsufficientStockError(shortages)
    return draws


class FabricLedger:

    def __init__(
        self,
        fabric_repo: FabricRepository,
        policy: StockPolicy = StockPolicy.STRICT,
    ) -> None:
        self._fabric_repo = fabric_repo
        self._policy = policy

    @property
    def policy(self) -> StockPolicy:
        return self._policy

    def find(self, name: str, color: str) -> Fabric | None:
        return self._fabric_repo.find(name, color)

    def add_stock(
        self,
        fabric_id: str,
        delta: Rolls,
        now: datetime | None = None,
    ) -> Fabric:
        """Record a manual stock entry for one fabric."""
        fabric = self._fabric_repo.get_by_id(fabric_id)
        if fabric is None:
            raise EntityNotFoundError(f"Fabric #{fabric_id} not found")
        fabric.add_stock(delta, now)
        self._fabric_repo.save(fabric)
        return fabric

    def consume_for_order(
        self,
        order: ProductionOrder,
        now: datetime | None = None,
    ) -> list[StockDraw]:
        """Take every roll the order needs out of stock.

        Phase 1 — plan: match each color to a fabric record and, under
                  STRICT, fail before any mutation if something is short.
        Phase 2 — mutate and persist each drawn record.
        """
        draws = plan_consumption(order, self._fabric_repo.list_all(), self._policy)

        for draw in draws:
            if self._policy is StockPolicy.STRICT:
                draw.fabric.consume(draw.rolls, now)
            else:
                uncovered = draw.fabric.consume_clamped(draw.rolls, now)
                if not uncovered.is_zero:
                    logger.warning(
                        "Stock of %s ran out cutting order %s (%s rolls uncovered)",
                        draw.fabric.label,
                        order.id,
                        uncovered,
                    )
            self._fabric_repo.save(draw.fabric)
        return draws
