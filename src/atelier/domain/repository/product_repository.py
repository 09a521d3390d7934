"""Abstract repository for the ProductReference aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from atelier.domain.model.product import ProductReference


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> ProductReference | None:
        """Return a reference by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> ProductReference | None:
        """Return a reference by its code (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[ProductReference]:
        """Return every reference in the catalog."""

    @abstractmethod
    def save(self, product: ProductReference) -> None:
        """Persist a new or updated reference. Assigns an id to new records."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a reference. Raises EntityNotFoundError if absent."""
