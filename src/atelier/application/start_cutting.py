"""Application service: Start Cutting use case.

Orchestrates the fabric ledger (stock consumption) and the order
aggregate (PLANNED -> CUTTING). Ledger writes happen first, then the
order write; under the STRICT policy the ledger validates every color
before writing anything.
"""

from __future__ import annotations

import logging

from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.order import OrderStatus
from atelier.domain.repository.fabric_repository import FabricRepository
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.service.fabric_ledger import FabricLedger, StockPolicy

logger = logging.getLogger(__name__)


class StartCuttingHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        fabric_repo: FabricRepository,
        policy: StockPolicy = StockPolicy.STRICT,
    ) -> None:
        self._order_repo = order_repo
        self._fabric_repo = fabric_repo
        self._policy = policy

    def handle(self, order_id: str) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        # Check the transition before drawing any stock
        if order.status != OrderStatus.PLANNED:
            raise ValidationError(
                f"Cannot start cutting order {order.id} — current status is "
                f"{order.status.value}, expected PLANNED"
            )

        ledger = FabricLedger(self._fabric_repo, self._policy)
        draws = ledger.consume_for_order(order)

        order.start_cutting()
        self._order_repo.save(order)
        logger.info(
            "Order %s moved to cutting (%d fabric records drawn, policy=%s)",
            order.id,
            len(draws),
            self._policy.value,
        )
