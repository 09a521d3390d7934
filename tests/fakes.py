"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Like the JSON repositories, every read hands out a fresh copy, so a
handler that fails halfway never leaves a half-mutated object behind.
"""

from __future__ import annotations

import copy

from atelier.domain.exceptions import EntityNotFoundError
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import ProductionOrder
from atelier.domain.model.product import ProductReference
from atelier.domain.model.seamstress import Seamstress
from atelier.domain.repository.fabric_repository import FabricRepository
from atelier.domain.repository.order_repository import OrderRepository
from atelier.domain.repository.product_repository import ProductRepository
from atelier.domain.repository.seamstress_repository import SeamstressRepository


class _Store:

    def __init__(self, records=None) -> None:
        self._store: dict[str, object] = {}
        self._next_id = 1
        for record in records or []:
            self.put(record)

    def put(self, record) -> None:
        if record.id is None:
            record.id = str(self._next_id)
        self._next_id = max(self._next_id, int(record.id) + 1 if record.id.isdigit() else 0)
        self._store[record.id] = copy.deepcopy(record)

    def get(self, record_id):
        record = self._store.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def all(self) -> list:
        return [copy.deepcopy(r) for r in self._store.values()]

    def remove(self, record_id) -> None:
        if record_id not in self._store:
            raise EntityNotFoundError(f"#{record_id} not found")
        del self._store[record_id]


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[ProductionOrder] | None = None) -> None:
        self._store = _Store(orders)
        self.saves = 0

    def next_id(self) -> str:
        ids = [int(o.id) for o in self._store.all() if o.id.isdigit()]
        return str(max(ids) + 1) if ids else "1"

    def get_by_id(self, order_id: str) -> ProductionOrder | None:
        return self._store.get(order_id)

    def list_all(self) -> list[ProductionOrder]:
        return sorted(self._store.all(), key=lambda o: o.created_at, reverse=True)

    def save(self, order: ProductionOrder) -> None:
        self.saves += 1
        self._store.put(order)

    def delete(self, order_id: str) -> None:
        self._store.remove(order_id)


class FakeFabricRepository(FabricRepository):

    def __init__(self, fabrics: list[Fabric] | None = None) -> None:
        self._store = _Store(fabrics)
        self.saves = 0

    def get_by_id(self, fabric_id: str) -> Fabric | None:
        return self._store.get(fabric_id)

    def find(self, name: str, color: str) -> Fabric | None:
        for fabric in self._store.all():
            if fabric.matches(name, color):
                return fabric
        return None

    def list_all(self) -> list[Fabric]:
        return self._store.all()

    def save(self, fabric: Fabric) -> None:
        self.saves += 1
        self._store.put(fabric)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[ProductReference] | None = None) -> None:
        self._store = _Store(products)

    def get_by_id(self, product_id: str) -> ProductReference | None:
        return self._store.get(product_id)

    def get_by_code(self, code: str) -> ProductReference | None:
        for p in self._store.all():
            if p.code.lower() == code.strip().lower():
                return p
        return None

    def list_all(self) -> list[ProductReference]:
        return self._store.all()

    def save(self, product: ProductReference) -> None:
        self._store.put(product)

    def delete(self, product_id: str) -> None:
        self._store.remove(product_id)


class FakeSeamstressRepository(SeamstressRepository):

    def __init__(self, seamstresses: list[Seamstress] | None = None) -> None:
        self._store = _Store(seamstresses)

    def get_by_id(self, seamstress_id: str) -> Seamstress | None:
        return self._store.get(seamstress_id)

    def list_all(self) -> list[Seamstress]:
        return self._store.all()

    def save(self, seamstress: Seamstress) -> None:
        self._store.put(seamstress)
