"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from atelier.application.dto import OrderDTO, order_to_dto
from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.order import OrderStatus
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.service.production_report import search_orders


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None, term: str = "") -> list[OrderDTO]:
        stage = None
        if status:
            try:
                stage = OrderStatus(status.upper())
            except ValueError:
                raise ValidationError(f"Unknown order status '{status}'") from None
        orders = search_orders(self._order_repo.list_all(), status=stage, term=term)
        return [order_to_dto(order) for order in orders]
