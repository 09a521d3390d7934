"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model. Resolves
the product reference, plans each color against the order's size grid and
lets the ProductionOrder aggregate validate the rest.
"""

from __future__ import annotations

import logging
from datetime import datetime

from atelier.application.dto import ItemPlanSpec, OrderDTO, order_to_dto
from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.order import OrderItem, ProductionOrder
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def plan_items(grid: str, specs: list[ItemPlanSpec]) -> list[OrderItem]:
    return [
        OrderItem.plan(
            color=spec.color,
            rolls_used=Rolls.of(spec.rolls),
            pieces_per_size=spec.pieces_per_size,
            grid=grid,
            color_hex=spec.color_hex,
        )
        for spec in specs
    ]


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        reference_id: str,
        item_specs: list[ItemPlanSpec],
        fabric: str = "",
        order_id: str | None = None,
        grid: str | None = None,
        notes: str = "",
        created_at: datetime | None = None,
    ) -> OrderDTO:
        """Plan a new production order.

        Steps:
        1. Resolve the reference (fail if none selected or not found).
        2. Pick the order id: given, or the next numeric one.
        3. Plan every color on the order's size grid.
        4. Let the aggregate validate, then persist.
        """
        if not reference_id or not reference_id.strip():
            raise ValidationError("A product reference must be selected")

        reference = self._product_repo.get_by_id(reference_id.strip())
        if reference is None:
            raise EntityNotFoundError(f"Product reference #{reference_id} not found")

        order_id = (order_id or "").strip() or self._order_repo.next_id()
        if self._order_repo.get_by_id(order_id) is not None:
            raise ValidationError(f"Order {order_id} already exists")

        grid = (grid or reference.default_grid).upper()
        order = ProductionOrder.create(
            order_id=order_id,
            reference=reference,
            fabric=fabric,
            items=plan_items(grid, item_specs),
            grid=grid,
            notes=notes,
            created_at=created_at,
        )
        self._order_repo.save(order)
        logger.info("Order %s planned for reference %s", order.id, order.reference_code)
        return order_to_dto(order)
