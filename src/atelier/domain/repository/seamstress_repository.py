"""Abstract repository for the Seamstress aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from atelier.domain.model.seamstress import Seamstress


class SeamstressRepository(ABC):

    @abstractmethod
    def get_by_id(self, seamstress_id: str) -> Seamstress | None:
        """Return a seamstress by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Seamstress]:
        """Return the whole roster, active or not."""

    @abstractmethod
    def save(self, seamstress: Seamstress) -> None:
        """Persist a new or updated seamstress. Assigns an id to new records."""
