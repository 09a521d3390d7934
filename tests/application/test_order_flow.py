"""Integration tests for the order use cases, end to end.

Uses in-memory fake repositories, no file I/O.
"""

from datetime import datetime, timezone

import pytest

from atelier.application.confirm_cut import ConfirmCutHandler
from atelier.application.create_order import CreateOrderHandler
from atelier.application.delete_order import DeleteOrderHandler
from atelier.application.distribute_order import DistributeOrderHandler
from atelier.application.dto import ItemPlanSpec
from atelier.application.finish_split import FinishSplitHandler
from atelier.application.revise_order import ReviseOrderHandler
from atelier.application.show_order import ListOrdersHandler, ShowOrderHandler
from atelier.application.start_cutting import StartCuttingHandler
from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import OrderStatus
from atelier.domain.model.product import ProductReference
from atelier.domain.model.seamstress import Seamstress
from atelier.domain.model.value_objects import Rolls
from tests.fakes import (
    FakeFabricRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeSeamstressRepository,
)

FULL = {"P": 10, "M": 10, "G": 10, "GG": 10}


class Workshop:
    """All fakes plus one handler per use case."""

    def __init__(self) -> None:
        self.orders = FakeOrderRepository()
        self.products = FakeProductRepository([
            ProductReference(id="1", code="REF-102", description="Blusa", default_fabric="Viscose"),
            ProductReference(id="2", code="PLUS-7", default_fabric="Linho", default_grid="PLUS"),
        ])
        self.fabrics = FakeFabricRepository([
            Fabric(id="1", name="Viscose", color="Azul", stock=Rolls.of("10")),
            Fabric(id="2", name="Viscose", color="Preto", stock=Rolls.of("5")),
        ])
        self.seamstresses = FakeSeamstressRepository([
            Seamstress(id="1", name="Ana"),
            Seamstress(id="2", name="Bia", active=False),
        ])

    def create(self, *specs: ItemPlanSpec, **kwargs):
        specs = specs or (ItemPlanSpec("Azul", "7.0", 10),)
        return CreateOrderHandler(self.orders, self.products).handle("1", list(specs), **kwargs)

    def cut(self, order_id: str) -> None:
        StartCuttingHandler(self.orders, self.fabrics).handle(order_id)

    def confirm(self, order_id: str, cut=None):
        return ConfirmCutHandler(self.orders).handle(order_id, cut or {"Azul": FULL})

    def distribute(self, order_id: str, request, seamstress_id: str = "1"):
        handler = DistributeOrderHandler(self.orders, self.seamstresses)
        return handler.handle(order_id, seamstress_id, request)

    def finish(self, order_id: str, split_id: str) -> OrderStatus:
        return FinishSplitHandler(self.orders).handle(order_id, split_id)


@pytest.fixture
def shop() -> Workshop:
    return Workshop()


# ── Create ───────────────────────────────────────────────────────────────────


class TestCreateOrder:

    def test_plans_order_from_reference(self, shop):
        dto = shop.create()
        assert dto.id == "1"
        assert dto.status == "PLANNED"
        assert dto.reference_code == "REF-102"
        assert dto.fabric == "Viscose"
        assert dto.estimated_pieces == 40
        assert dto.items[0].estimated_sizes == FULL
        assert dto.items[0].cut_sizes is None

    def test_sequential_ids(self, shop):
        first = shop.create()
        second = shop.create()
        assert (first.id, second.id) == ("1", "2")

    def test_explicit_id(self, shop):
        dto = shop.create(order_id="OP-77")
        assert shop.orders.get_by_id("OP-77") is not None
        assert dto.id == "OP-77"

    def test_duplicate_id_rejected(self, shop):
        shop.create(order_id="5")
        with pytest.raises(ValidationError, match="already exists"):
            shop.create(order_id="5")

    def test_reference_grid_is_default(self):
        shop = Workshop()
        dto = CreateOrderHandler(shop.orders, shop.products).handle(
            "2", [ItemPlanSpec("Verde", "2", 3)]
        )
        assert dto.grid == "PLUS"
        assert dto.fabric == "Linho"
        assert dto.items[0].estimated_sizes == {"G1": 3, "G2": 3, "G3": 3}

    def test_missing_reference_rejected(self, shop):
        handler = CreateOrderHandler(shop.orders, shop.products)
        with pytest.raises(ValidationError, match="must be selected"):
            handler.handle("", [ItemPlanSpec("Azul", "1", 1)])
        with pytest.raises(EntityNotFoundError):
            handler.handle("99", [ItemPlanSpec("Azul", "1", 1)])
        assert shop.orders.list_all() == []

    def test_created_at_is_kept(self, shop):
        stamp = datetime(2026, 1, 5, 14, 30, tzinfo=timezone.utc)
        dto = shop.create(created_at=stamp)
        assert dto.created_at == "2026-01-05 14:30 UTC"


class TestReviseOrder:

    def test_replaces_items(self, shop):
        shop.create()
        dto = ReviseOrderHandler(shop.orders).handle(
            "1", [ItemPlanSpec("Preto", "2", 5)], notes="trocar cor"
        )
        assert [i.color for i in dto.items] == ["Preto"]
        assert dto.notes == "trocar cor"
        assert dto.fabric == "Viscose"

    def test_rejected_once_cutting(self, shop):
        shop.create()
        shop.cut("1")
        with pytest.raises(ValidationError, match="expected PLANNED"):
            ReviseOrderHandler(shop.orders).handle("1", [ItemPlanSpec("Preto", "2", 5)])


# ── Start cutting ────────────────────────────────────────────────────────────


class TestStartCutting:

    def test_draws_fabric_and_moves_to_cutting(self, shop):
        shop.create(ItemPlanSpec("Azul", "7.0", 10), ItemPlanSpec("Preto", "3.5", 8))
        shop.cut("1")
        assert shop.orders.get_by_id("1").status == OrderStatus.CUTTING
        assert shop.fabrics.get_by_id("1").stock == Rolls.of("3")
        assert shop.fabrics.get_by_id("2").stock == Rolls.of("1.5")

    def test_short_stock_changes_nothing(self, shop):
        shop.create(ItemPlanSpec("Preto", "7.0", 10))
        with pytest.raises(ValidationError, match="Insufficient fabric stock"):
            shop.cut("1")
        assert shop.fabrics.get_by_id("2").stock == Rolls.of("5.0")
        assert shop.orders.get_by_id("1").status == OrderStatus.PLANNED

    def test_second_start_draws_nothing_more(self, shop):
        shop.create()
        shop.cut("1")
        with pytest.raises(ValidationError, match="expected PLANNED"):
            shop.cut("1")
        assert shop.fabrics.get_by_id("1").stock == Rolls.of("3")

    def test_unknown_order(self, shop):
        with pytest.raises(EntityNotFoundError):
            shop.cut("404")


# ── Confirm, distribute, finish ──────────────────────────────────────────────


class TestConfirmCut:

    def test_seeds_pool(self, shop):
        shop.create()
        shop.cut("1")
        dto = shop.confirm("1", {"Azul": {"P": 9, "M": 10, "G": 10, "GG": 8}})
        assert dto.cutting_stock_pieces == 37
        assert dto.items[0].actual_pieces == 37
        assert dto.items[0].estimated_pieces == 40
        assert dto.status == "CUTTING"

    def test_persists(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1")
        assert shop.orders.get_by_id("1").has_confirmed_cut


class TestDistribute:

    def test_partial_distribution(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1")

        split = shop.distribute("1", {"Azul": {"P": 10, "M": 5}})

        assert split.actual_pieces == 15
        assert split.seamstress_name == "Ana"
        assert split.sizes_by_color == {"Azul": {"P": 10, "M": 5}}
        saved = shop.orders.get_by_id("1")
        assert saved.status == OrderStatus.SEWING
        assert saved.active_cutting_items[0].sizes.as_dict() == {"P": 0, "M": 5, "G": 10, "GG": 10}

    def test_inactive_seamstress_rejected(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1")
        with pytest.raises(ValidationError, match="inactive"):
            shop.distribute("1", {"Azul": {"P": 1}}, seamstress_id="2")
        assert shop.orders.get_by_id("1").splits == []

    def test_unknown_seamstress(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1")
        with pytest.raises(EntityNotFoundError, match="Seamstress"):
            shop.distribute("1", {"Azul": {"P": 1}}, seamstress_id="9")

    def test_failed_request_is_not_saved(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1")
        saves = shop.orders.saves
        with pytest.raises(ValidationError):
            shop.distribute("1", {"Azul": {"P": 2}, "Roxo": {"P": 1}})
        assert shop.orders.saves == saves
        assert shop.orders.get_by_id("1").cutting_stock_pieces == 40


class TestFinishSplit:

    def test_full_run_finishes_order(self, shop):
        shop.create()
        shop.cut("1")
        shop.confirm("1", {"Azul": {"P": 3, "M": 3}})
        first = shop.distribute("1", {"Azul": {"P": 3}})
        second = shop.distribute("1", {"Azul": {"M": 3}})

        assert shop.finish("1", first.id) == OrderStatus.SEWING
        assert shop.finish("1", second.id) == OrderStatus.FINISHED

        dto = ShowOrderHandler(shop.orders).handle("1")
        assert dto.finished_at is not None
        assert all(s.status == "FINISHED" for s in dto.splits)

    def test_unknown_split(self, shop):
        shop.create()
        with pytest.raises(EntityNotFoundError):
            shop.finish("1", "missing")


# ── Queries and delete ───────────────────────────────────────────────────────


class TestListAndShow:

    def test_show_unknown(self, shop):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(shop.orders).handle("7")

    def test_list_filters_by_status(self, shop):
        shop.create()
        shop.create()
        shop.cut("2")
        handler = ListOrdersHandler(shop.orders)
        assert [o.id for o in handler.handle(status="cutting")] == ["2"]
        assert len(handler.handle()) == 2

    def test_list_rejects_unknown_status(self, shop):
        with pytest.raises(ValidationError, match="Unknown order status"):
            ListOrdersHandler(shop.orders).handle(status="SHIPPED")


class TestDeleteOrder:

    def test_removes_order_but_keeps_fabric_drawn(self, shop):
        shop.create()
        shop.cut("1")
        DeleteOrderHandler(shop.orders).handle("1")
        assert shop.orders.get_by_id("1") is None
        assert shop.fabrics.get_by_id("1").stock == Rolls.of("3")

    def test_unknown_order(self, shop):
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(shop.orders).handle("1")
