"""Record-store-backed implementation of OrderRepository."""

from __future__ import annotations

from pathlib import Path

import pydantic

from atelier.domain.exceptions import PersistenceError
from atelier.domain.model.order import (
    CuttingItem,
    OrderItem,
    OrderSplit,
    OrderStatus,
    ProductionOrder,
    SplitItem,
    SplitStatus,
)
from atelier.domain.model.value_objects import Rolls, SizeBreakdown
from atelier.domain.repository.order_repository import OrderRepository
from atelier.infrastructure.persistence.codec import (
    as_utc,
    decode_blob,
    encode_blob,
    from_storage_time,
    to_storage_time,
)
from atelier.infrastructure.persistence.record_store import JsonRecordStore
from atelier.infrastructure.persistence.schemas import (
    CUTTING_ITEMS,
    ORDER_ITEMS,
    SPLITS,
    CuttingItemRecord,
    OrderItemRecord,
    OrderRow,
    SplitItemRecord,
    SplitRecord,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonRecordStore(file_path, "Order")

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return self._store.next_id()

    def get_by_id(self, order_id: str) -> ProductionOrder | None:
        row = self._store.get(order_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[ProductionOrder]:
        orders = [self._to_domain(row) for row in self._store.list_all()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def save(self, order: ProductionOrder) -> None:
        self._store.upsert(self._to_raw(order))

    def delete(self, order_id: str) -> None:
        self._store.delete(order_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: ProductionOrder) -> dict:
        items = [
            OrderItemRecord(
                color=i.color,
                color_hex=i.color_hex,
                rolls_used=i.rolls_used.amount,
                pieces_per_size=i.pieces_per_size,
                estimated_sizes=i.estimated_sizes.as_dict(),
                cut_sizes=i.cut_sizes.as_dict() if i.cut_sizes is not None else None,
            )
            for i in order.items
        ]
        pool = [
            CuttingItemRecord(color=c.color, color_hex=c.color_hex, sizes=c.sizes.as_dict())
            for c in order.active_cutting_items
        ]
        splits = [
            SplitRecord(
                id=s.id,
                seamstress_id=s.seamstress_id,
                seamstress_name=s.seamstress_name,
                status=s.status.value,
                items=[
                    SplitItemRecord(color=i.color, color_hex=i.color_hex, sizes=i.sizes.as_dict())
                    for i in s.items
                ],
                created_at=s.created_at,
                finished_at=s.finished_at,
            )
            for s in order.splits
        ]
        return {
            "id": order.id,
            "reference_id": order.reference_id,
            "reference_code": order.reference_code,
            "description": order.description,
            "fabric": order.fabric,
            "grid": order.grid,
            "status": order.status.value,
            "notes": order.notes,
            "items": encode_blob(items),
            "active_cutting_items": encode_blob(pool),
            "splits": encode_blob(splits),
            "created_at": to_storage_time(order.created_at),
            "updated_at": to_storage_time(order.updated_at),
            "finished_at": to_storage_time(order.finished_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductionOrder:
        try:
            row = OrderRow.model_validate(raw)
        except pydantic.ValidationError as exc:
            raise PersistenceError(f"Corrupt order record {raw.get('id')!r}") from exc

        items: list[OrderItemRecord] = decode_blob(
            row.items, ORDER_ITEMS, record_id=row.id, field="items"
        )
        pool: list[CuttingItemRecord] = decode_blob(
            row.active_cutting_items, CUTTING_ITEMS, record_id=row.id, field="active_cutting_items"
        )
        splits: list[SplitRecord] = decode_blob(
            row.splits, SPLITS, record_id=row.id, field="splits"
        )
        created_at = from_storage_time(row.created_at)
        if created_at is None:
            raise PersistenceError(f"Order record {row.id!r} has no creation time")

        return ProductionOrder(
            id=row.id,
            reference_id=row.reference_id,
            reference_code=row.reference_code,
            description=row.description,
            fabric=row.fabric,
            grid=row.grid,
            notes=row.notes,
            status=OrderStatus(row.status),
            items=[
                OrderItem(
                    color=i.color,
                    color_hex=i.color_hex,
                    rolls_used=Rolls(i.rolls_used),
                    pieces_per_size=i.pieces_per_size,
                    estimated_sizes=SizeBreakdown.of(i.estimated_sizes),
                    cut_sizes=SizeBreakdown.of(i.cut_sizes) if i.cut_sizes is not None else None,
                )
                for i in items
            ],
            active_cutting_items=[
                CuttingItem(color=c.color, color_hex=c.color_hex, sizes=SizeBreakdown.of(c.sizes))
                for c in pool
            ],
            splits=[
                OrderSplit(
                    id=s.id,
                    seamstress_id=s.seamstress_id,
                    seamstress_name=s.seamstress_name,
                    status=SplitStatus(s.status),
                    items=tuple(
                        SplitItem(color=i.color, color_hex=i.color_hex, sizes=SizeBreakdown.of(i.sizes))
                        for i in s.items
                    ),
                    created_at=as_utc(s.created_at),
                    finished_at=as_utc(s.finished_at) if s.finished_at is not None else None,
                )
                for s in splits
            ],
            created_at=created_at,
            updated_at=from_storage_time(row.updated_at) or created_at,
            finished_at=from_storage_time(row.finished_at),
        )
