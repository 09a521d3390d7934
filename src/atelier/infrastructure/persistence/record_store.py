"""JSON-file record store — the persistence collaborator.

One file per entity type, holding a list of flat rows. Every entity type
gets the same contract: list, get, create (assigning an id when absent),
full replace, partial merge, delete.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from atelier.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)

Row = dict[str, Any]


class JsonRecordStore:

    def __init__(self, file_path: Path, entity: str) -> None:
        self._file_path = file_path
        self._entity = entity
        self._ensure_file()

    @property
    def entity(self) -> str:
        return self._entity

    # --- Record contract ------------------------------------------------------

    def list_all(self) -> list[Row]:
        return self._load_raw()

    def get(self, record_id: str) -> Row | None:
        for row in self._load_raw():
            if row.get("id") == record_id:
                return row
        return None

    def create(self, row: Row) -> Row:
        """Insert a new row, generating the next numeric id if it has none."""
        rows = self._load_raw()
        record = dict(row)
        if not record.get("id"):
            record["id"] = self._next_id(rows)
        if any(r.get("id") == record["id"] for r in rows):
            raise ValidationError(f"{self._entity} #{record['id']} already exists")
        rows.append(record)
        self._persist_raw(rows)
        return record

    def replace(self, record_id: str, row: Row) -> Row:
        rows = self._load_raw()
        index = self._index_of(rows, record_id)
        record = {**row, "id": record_id}
        rows[index] = record
        self._persist_raw(rows)
        return record

    def patch(self, record_id: str, fields: Row) -> Row:
        """Merge *fields* into an existing row. The id never changes."""
        rows = self._load_raw()
        index = self._index_of(rows, record_id)
        merged = {**rows[index], **{k: v for k, v in fields.items() if k != "id"}}
        rows[index] = merged
        self._persist_raw(rows)
        return merged

    def delete(self, record_id: str) -> None:
        rows = self._load_raw()
        index = self._index_of(rows, record_id)
        del rows[index]
        self._persist_raw(rows)

    def upsert(self, row: Row) -> Row:
        """Replace the row with the same id, or create it."""
        record_id = row.get("id")
        if record_id and self.get(record_id) is not None:
            return self.replace(record_id, row)
        return self.create(row)

    # --- Helpers --------------------------------------------------------------

    def next_id(self) -> str:
        return self._next_id(self._load_raw())

    @staticmethod
    def _next_id(rows: list[Row]) -> str:
        numeric = [int(r["id"]) for r in rows if str(r.get("id", "")).isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    def _index_of(self, rows: list[Row], record_id: str) -> int:
        for i, row in enumerate(rows):
            if row.get("id") == record_id:
                return i
        raise EntityNotFoundError(f"{self._entity} #{record_id} not found")

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[Row]:
        try:
            rows = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(
                f"Cannot read {self._entity} records from {self._file_path}"
            ) from exc
        if not isinstance(rows, list):
            raise PersistenceError(f"{self._file_path} does not hold a list of records")
        return rows

    def _persist_raw(self, rows: list[Row]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(
                f"Cannot write {self._entity} records to {self._file_path}"
            ) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"Cannot create {self._file_path}") from exc
