"""Application service: Revise Order use case (edit a PLANNED order)."""

from __future__ import annotations

from atelier.application.create_order import plan_items
from atelier.application.dto import ItemPlanSpec, OrderDTO, order_to_dto
from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.repository.order_repository import OrderRepository


class ReviseOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: str,
        item_specs: list[ItemPlanSpec],
        fabric: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.revise_plan(
            fabric=fabric or order.fabric,
            items=plan_items(order.grid, item_specs),
            notes=notes,
        )
        self._order_repo.save(order)
        return order_to_dto(order)
