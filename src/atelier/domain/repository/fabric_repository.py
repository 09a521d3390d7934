"""Abstract repository for the Fabric aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from atelier.domain.model.fabric import Fabric


class FabricRepository(ABC):

    @abstractmethod
    def get_by_id(self, fabric_id: str) -> Fabric | None:
        """Return a fabric by its ID, or None if not found."""

    @abstractmethod
    def find(self, name: str, color: str) -> Fabric | None:
        """Return the fabric matching (name, color) case-insensitively."""

    @abstractmethod
    def list_all(self) -> list[Fabric]:
        """Return every fabric record, sorted by name."""

    @abstractmethod
    def save(self, fabric: Fabric) -> None:
        """Persist a new or updated fabric. Assigns an id to new records."""
