"""Application service: Confirm Cut use case."""

from __future__ import annotations

import logging

from atelier.application.dto import OrderDTO, order_to_dto
from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.model.value_objects import SizeBreakdown
from atelier.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ConfirmCutHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, cut: dict[str, dict[str, int]]) -> OrderDTO:
        """Record the realized cut.

        Args:
            order_id: The order being cut.
            cut: color -> {size: pieces actually cut}.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.confirm_cut({color: SizeBreakdown.of(sizes) for color, sizes in cut.items()})
        self._order_repo.save(order)
        logger.info(
            "Cut confirmed for order %s: %d pieces at the cutting table",
            order.id,
            order.cutting_stock_pieces,
        )
        return order_to_dto(order)
