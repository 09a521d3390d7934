"""Application service: Distribute use case.

Hands part of an order's cutting pool to one seamstress as a new split.
"""

from __future__ import annotations

import logging

from atelier.application.dto import SplitDTO, order_to_dto
from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.model.value_objects import SizeBreakdown
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.repository.seamstress_repository import SeamstressRepository

logger = logging.getLogger(__name__)


class DistributeOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        seamstress_repo: SeamstressRepository,
    ) -> None:
        self._order_repo = order_repo
        self._seamstress_repo = seamstress_repo

    def handle(
        self,
        order_id: str,
        seamstress_id: str,
        request: dict[str, dict[str, int]],
    ) -> SplitDTO:
        """Distribute pieces to a seamstress.

        Args:
            order_id: The order whose cut pieces are handed out.
            seamstress_id: Who receives them.
            request: color -> {size: pieces wanted}. Sizes are capped at
                what remains at the cutting table.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        seamstress = self._seamstress_repo.get_by_id(seamstress_id)
        if seamstress is None:
            raise EntityNotFoundError(f"Seamstress #{seamstress_id} not found")

        split = order.distribute(
            seamstress,
            {color: SizeBreakdown.of(sizes) for color, sizes in request.items()},
        )
        self._order_repo.save(order)
        logger.info(
            "Order %s: %d pieces sent to %s (split %s, %d left at the cutting table)",
            order.id,
            split.actual_pieces,
            seamstress.name,
            split.id,
            order.cutting_stock_pieces,
        )
        dto = order_to_dto(order)
        return next(s for s in dto.splits if s.id == split.id)
