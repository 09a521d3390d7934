"""Application service: Finish Split use case.

Marks a seamstress's packet as sewn. The order aggregate decides whether
the whole order is now finished.
"""

from __future__ import annotations

import logging

from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.model.order import OrderStatus
from atelier.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class FinishSplitHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, split_id: str) -> OrderStatus:
        """Finish one split and return the resulting order status."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        split = order.finish_split(split_id)
        self._order_repo.save(order)

        logger.info(
            "Split %s of order %s finished by %s (%d pieces)",
            split.id,
            order.id,
            split.seamstress_name,
            split.actual_pieces,
        )
        if order.status == OrderStatus.FINISHED:
            logger.info("Order %s finished", order.id)
        return order.status
