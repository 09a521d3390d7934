"""Record-store-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

import pydantic

from atelier.domain.exceptions import PersistenceError
from atelier.domain.model.product import ProductReference
from atelier.domain.model.value_objects import ColorSwatch
from atelier.domain.repository.product_repository import ProductRepository
from atelier.infrastructure.persistence.codec import decode_blob, encode_blob
from atelier.infrastructure.persistence.record_store import JsonRecordStore
from atelier.infrastructure.persistence.schemas import COLORS, ColorRecord, ProductRow


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonRecordStore(file_path, "Product")

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> ProductReference | None:
        row = self._store.get(product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_code(self, code: str) -> ProductReference | None:
        for product in self.list_all():
            if product.code.lower() == code.strip().lower():
                return product
        return None

    def list_all(self) -> list[ProductReference]:
        return [self._to_domain(row) for row in self._store.list_all()]

    def save(self, product: ProductReference) -> None:
        saved = self._store.upsert(self._to_raw(product))
        product.id = saved["id"]

    def delete(self, product_id: str) -> None:
        self._store.delete(product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: ProductReference) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "description": product.description,
            "default_fabric": product.default_fabric,
            "default_colors": encode_blob(
                [ColorRecord(name=c.name, hex=c.hex) for c in product.default_colors]
            ),
            "default_grid": product.default_grid,
            "estimated_pieces_per_roll": product.estimated_pieces_per_roll,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductReference:
        try:
            row = ProductRow.model_validate(raw)
        except pydantic.ValidationError as exc:
            raise PersistenceError(f"Corrupt product record {raw.get('id')!r}") from exc

        colors: list[ColorRecord] = decode_blob(
            row.default_colors, COLORS, record_id=row.id, field="default_colors"
        )
        return ProductReference(
            id=row.id,
            code=row.code,
            description=row.description,
            default_fabric=row.default_fabric,
            default_colors=[ColorSwatch(name=c.name, hex=c.hex) for c in colors],
            estimated_pieces_per_roll=row.estimated_pieces_per_roll,
            default_grid=row.default_grid,
        )
