"""Application service: Register / Edit Fabric use cases."""

from __future__ import annotations

import logging

from atelier.application.dto import FabricDTO, fabric_to_dto
from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.fabric_repository import FabricRepository

logger = logging.getLogger(__name__)


class RegisterFabricHandler:

    def __init__(self, fabric_repo: FabricRepository) -> None:
        self._fabric_repo = fabric_repo

    def handle(
        self,
        name: str,
        color: str,
        stock: str = "0",
        color_hex: str = "",
        notes: str = "",
    ) -> FabricDTO:
        """Add a fabric/color pair to the stock book."""
        if self._fabric_repo.find(name, color) is not None:
            raise ValidationError(f"Fabric '{name}/{color}' already exists")

        fabric = Fabric.register(
            name=name,
            color=color,
            stock=Rolls.of(stock),
            color_hex=color_hex,
            notes=notes,
        )
        self._fabric_repo.save(fabric)
        logger.info("Fabric %s registered with %s rolls", fabric.label, fabric.stock)
        return fabric_to_dto(fabric)


class EditFabricHandler:

    def __init__(self, fabric_repo: FabricRepository) -> None:
        self._fabric_repo = fabric_repo

    def handle(
        self,
        fabric_id: str,
        color_hex: str | None = None,
        notes: str | None = None,
    ) -> FabricDTO:
        fabric = self._fabric_repo.get_by_id(fabric_id)
        if fabric is None:
            raise EntityNotFoundError(f"Fabric #{fabric_id} not found")
        fabric.revise(color_hex=color_hex, notes=notes)
        self._fabric_repo.save(fabric)
        return fabric_to_dto(fabric)
