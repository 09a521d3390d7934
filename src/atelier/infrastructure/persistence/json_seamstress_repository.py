"""Record-store-backed implementation of SeamstressRepository."""

from __future__ import annotations

from pathlib import Path

import pydantic

from atelier.domain.exceptions import PersistenceError
from atelier.domain.model.seamstress import Seamstress
from atelier.domain.repository.seamstress_repository import SeamstressRepository
from atelier.infrastructure.persistence.record_store import JsonRecordStore
from atelier.infrastructure.persistence.schemas import SeamstressRow


class JsonSeamstressRepository(SeamstressRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonRecordStore(file_path, "Seamstress")

    def get_by_id(self, seamstress_id: str) -> Seamstress | None:
        row = self._store.get(seamstress_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Seamstress]:
        return [self._to_domain(row) for row in self._store.list_all()]

    def save(self, seamstress: Seamstress) -> None:
        saved = self._store.upsert(
            {
                "id": seamstress.id,
                "name": seamstress.name,
                "phone": seamstress.phone,
                "specialty": seamstress.specialty,
                "address": seamstress.address,
                "city": seamstress.city,
                "active": seamstress.active,
            }
        )
        seamstress.id = saved["id"]

    @staticmethod
    def _to_domain(raw: dict) -> Seamstress:
        try:
            row = SeamstressRow.model_validate(raw)
        except pydantic.ValidationError as exc:
            raise PersistenceError(f"Corrupt seamstress record {raw.get('id')!r}") from exc
        return Seamstress(**row.model_dump())
