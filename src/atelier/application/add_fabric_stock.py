"""Application service: Stock Entry use case.

A stock entry is strictly additive: the user says how many rolls came in
and the ledger adds them to the current stock.
"""

from __future__ import annotations

import logging

from atelier.application.dto import FabricDTO, fabric_to_dto
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.fabric_repository import FabricRepository
from atelier.domain.service.fabric_ledger import FabricLedger

logger = logging.getLogger(__name__)


class AddFabricStockHandler:

    def __init__(self, fabric_repo: FabricRepository) -> None:
        self._fabric_repo = fabric_repo

    def handle(self, fabric_id: str, rolls: str) -> FabricDTO:
        fabric = FabricLedger(self._fabric_repo).add_stock(fabric_id, Rolls.of(rolls))
        logger.info("Stock entry of %s rolls for %s", rolls, fabric.label)
        return fabric_to_dto(fabric)
