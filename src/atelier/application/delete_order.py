"""Application service: Delete Order use case.

Deleting never returns fabric to stock; rolls drawn at cutting stay drawn.
"""

from __future__ import annotations

import logging

from atelier.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> None:
        self._order_repo.delete(order_id)
        logger.info("Order %s deleted", order_id)
