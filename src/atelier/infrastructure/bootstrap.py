"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from atelier.domain.service.fabric_ledger import StockPolicy
from atelier.infrastructure.persistence.json_fabric_repository import (
    JsonFabricRepository,
)
from atelier.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from atelier.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from atelier.infrastructure.persistence.json_seamstress_repository import (
    JsonSeamstressRepository,
)
from atelier.infrastructure.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@dataclass(frozen=True)
class Container:
    """Repositories and policy for one CLI invocation."""

    data_dir: Path
    stock_policy: StockPolicy

    def order_repository(self) -> JsonOrderRepository:
        return JsonOrderRepository(self.data_dir / "orders.json")

    def fabric_repository(self) -> JsonFabricRepository:
        return JsonFabricRepository(self.data_dir / "fabrics.json")

    def product_repository(self) -> JsonProductRepository:
        return JsonProductRepository(self.data_dir / "products.json")

    def seamstress_repository(self) -> JsonSeamstressRepository:
        return JsonSeamstressRepository(self.data_dir / "seamstresses.json")


def build_container(settings: Settings, data_dir: Path | None = None) -> Container:
    return Container(
        data_dir=data_dir or settings.data_dir,
        stock_policy=settings.stock_policy,
    )
