"""Abstract repository for the ProductionOrder aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from atelier.domain.model.order import ProductionOrder


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Suggest the next order id (highest numeric id + 1)."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> ProductionOrder | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ProductionOrder]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: ProductionOrder) -> None:
        """Persist a new or updated order."""

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order. Raises EntityNotFoundError if absent."""
