"""Record-store-backed implementation of FabricRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pydantic

from atelier.domain.exceptions import PersistenceError
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.value_objects import Rolls
from atelier.domain.repository.fabric_repository import FabricRepository
from atelier.infrastructure.persistence.codec import from_storage_time, to_storage_time
from atelier.infrastructure.persistence.record_store import JsonRecordStore
from atelier.infrastructure.persistence.schemas import FabricRow


class JsonFabricRepository(FabricRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonRecordStore(file_path, "Fabric")

    # --- FabricRepository interface -------------------------------------------

    def get_by_id(self, fabric_id: str) -> Fabric | None:
        row = self._store.get(fabric_id)
        return self._to_domain(row) if row is not None else None

    def find(self, name: str, color: str) -> Fabric | None:
        for fabric in self.list_all():
            if fabric.matches(name, color):
                return fabric
        return None

    def list_all(self) -> list[Fabric]:
        fabrics = [self._to_domain(row) for row in self._store.list_all()]
        return sorted(fabrics, key=lambda f: (f.name.lower(), f.color.lower()))

    def save(self, fabric: Fabric) -> None:
        saved = self._store.upsert(self._to_raw(fabric))
        fabric.id = saved["id"]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(fabric: Fabric) -> dict:
        return {
            "id": fabric.id,
            "name": fabric.name,
            "color": fabric.color,
            "color_hex": fabric.color_hex,
            "stock_rolls": str(fabric.stock.amount),
            "notes": fabric.notes,
            "created_at": to_storage_time(fabric.created_at),
            "updated_at": to_storage_time(fabric.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Fabric:
        try:
            row = FabricRow.model_validate(raw)
        except pydantic.ValidationError as exc:
            raise PersistenceError(f"Corrupt fabric record {raw.get('id')!r}") from exc

        created_at = from_storage_time(row.created_at) or datetime.now(timezone.utc)
        return Fabric(
            id=row.id,
            name=row.name,
            color=row.color,
            color_hex=row.color_hex,
            stock=Rolls(row.stock_rolls),
            notes=row.notes,
            created_at=created_at,
            updated_at=from_storage_time(row.updated_at) or created_at,
        )
