"""Application services: seamstress roster use cases."""

from __future__ import annotations

import logging

from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.model.seamstress import Seamstress
from atelier.domain.repository.seamstress_repository import SeamstressRepository

logger = logging.getLogger(__name__)


class RegisterSeamstressHandler:

    def __init__(self, seamstress_repo: SeamstressRepository) -> None:
        self._seamstress_repo = seamstress_repo

    def handle(
        self,
        name: str,
        phone: str = "",
        specialty: str = "",
        address: str = "",
        city: str = "",
    ) -> Seamstress:
        seamstress = Seamstress.register(
            name=name, phone=phone, specialty=specialty, address=address, city=city
        )
        self._seamstress_repo.save(seamstress)
        logger.info("Seamstress %s registered as #%s", seamstress.name, seamstress.id)
        return seamstress


class UpdateSeamstressHandler:

    def __init__(self, seamstress_repo: SeamstressRepository) -> None:
        self._seamstress_repo = seamstress_repo

    def handle(self, seamstress_id: str, **contact: str | None) -> Seamstress:
        """Update contact fields (name, phone, specialty, address, city)."""
        seamstress = self._load(seamstress_id)
        seamstress.update_contact(**contact)
        self._seamstress_repo.save(seamstress)
        return seamstress

    def set_active(self, seamstress_id: str, active: bool) -> Seamstress:
        """Deactivate or reactivate. Past splits are left as they are."""
        seamstress = self._load(seamstress_id)
        if active:
            seamstress.activate()
        else:
            seamstress.deactivate()
        self._seamstress_repo.save(seamstress)
        logger.info(
            "Seamstress %s %s", seamstress.name, "activated" if active else "deactivated"
        )
        return seamstress

    def _load(self, seamstress_id: str) -> Seamstress:
        seamstress = self._seamstress_repo.get_by_id(seamstress_id)
        if seamstress is None:
            raise EntityNotFoundError(f"Seamstress #{seamstress_id} not found")
        return seamstress
