"""Application service: Show Fabrics use case (query)."""

from __future__ import annotations

from atelier.application.dto import FabricDTO, fabric_to_dto
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.fabric_repository import FabricRepository
from atelier.domain.service.production_report import filter_fabrics


class ShowFabricsHandler:

    def __init__(self, fabric_repo: FabricRepository) -> None:
        self._fabric_repo = fabric_repo

    def handle(
        self,
        name: str = "",
        color: str = "",
        min_stock: str | None = None,
    ) -> list[FabricDTO]:
        threshold = Rolls.of(min_stock).amount if min_stock else None
        fabrics = filter_fabrics(
            self._fabric_repo.list_all(), name=name, color=color, min_stock=threshold
        )
        return [fabric_to_dto(f) for f in fabrics]
