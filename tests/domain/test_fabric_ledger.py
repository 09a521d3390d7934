"""Unit tests for the Fabric aggregate and the FabricLedger domain service."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from atelier.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from atelier.domain.model.fabric import Fabric
from atelier.domain.model.order import OrderItem, ProductionOrder
from atelier.domain.model.product import ProductReference
from atelier.domain.model.value_objects import NO_ROLLS, Rolls
from atelier.domain.service.fabric_ledger import (
    FabricLedger,
    StockPolicy,
    plan_consumption,
)
from tests.fakes import FakeFabricRepository

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)
REF = ProductReference(id="1", code="REF-102")


def _fabric(fid: str, color: str, stock: str, name: str = "Viscose") -> Fabric:
    return Fabric(id=fid, name=name, color=color, stock=Rolls.of(stock), created_at=T0, updated_at=T0)


def _order(*items: tuple[str, str]) -> ProductionOrder:
    planned = [OrderItem.plan(color, Rolls.of(rolls), 10) for color, rolls in items]
    return ProductionOrder.create("1", REF, "Viscose", planned)


# ── Fabric aggregate ─────────────────────────────────────────────────────────


class TestFabric:

    def test_register_strips_fields(self):
        fabric = Fabric.register(" Viscose ", " Azul ")
        assert fabric.id is None
        assert fabric.label == "Viscose/Azul"
        assert fabric.stock == NO_ROLLS

    def test_register_requires_name_and_color(self):
        with pytest.raises(ValidationError, match="name is required"):
            Fabric.register("", "Azul")
        with pytest.raises(ValidationError, match="color is required"):
            Fabric.register("Viscose", " ")

    def test_matches_is_case_insensitive(self):
        assert _fabric("1", "Azul", "1").matches("viscose", "AZUL ")
        assert not _fabric("1", "Azul", "1").matches("Viscose", "Preto")

    def test_stock_entry_adds_and_refreshes_timestamp(self):
        fabric = _fabric("1", "Azul", "10.0")
        later = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
        fabric.add_stock(Rolls.of("3.2"), later)
        assert fabric.stock == Rolls.of("13.2")
        assert fabric.updated_at == later

    def test_zero_stock_entry_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _fabric("1", "Azul", "10").add_stock(NO_ROLLS)

    def test_consume_beyond_stock_rejected(self):
        fabric = _fabric("1", "Azul", "5.0")
        with pytest.raises(InsufficientStockError) as exc:
            fabric.consume(Rolls.of("7.0"))
        assert exc.value.shortages[0].missing == Decimal("2.0")
        assert fabric.stock == Rolls.of("5.0")

    def test_consume_clamped_reports_uncovered(self):
        fabric = _fabric("1", "Azul", "5.0")
        uncovered = fabric.consume_clamped(Rolls.of("7.0"))
        assert uncovered == Rolls.of("2.0")
        assert fabric.stock == NO_ROLLS

    def test_revise_leaves_stock_alone(self):
        fabric = _fabric("1", "Azul", "5.0")
        fabric.revise(color_hex="#0000ff", notes="lote 12")
        assert fabric.color_hex == "#0000ff"
        assert fabric.notes == "lote 12"
        assert fabric.stock == Rolls.of("5.0")


# ── plan_consumption ─────────────────────────────────────────────────────────


class TestPlanConsumption:

    def test_matches_each_color_to_its_record(self):
        fabrics = [_fabric("1", "Azul", "10"), _fabric("2", "Preto", "10")]
        draws = plan_consumption(_order(("Azul", "7"), ("Preto", "3.5")), fabrics)
        assert [(d.fabric.id, d.rolls) for d in draws] == [
            ("1", Rolls.of("7")),
            ("2", Rolls.of("3.5")),
        ]

    def test_zero_roll_items_draw_nothing(self):
        draws = plan_consumption(_order(("Azul", "0")), [])
        assert draws == []

    def test_strict_reports_every_shortage(self):
        fabrics = [_fabric("1", "Azul", "5.0")]
        with pytest.raises(InsufficientStockError) as exc:
            plan_consumption(_order(("Azul", "7.0"), ("Preto", "1")), fabrics)
        shortages = exc.value.shortages
        assert [(s.color, s.available) for s in shortages] == [
            ("Azul", Decimal("5.0")),
            ("Preto", Decimal("0")),
        ]
        assert "Viscose/Azul" in str(exc.value)

    def test_clamp_skips_missing_records(self):
        fabrics = [_fabric("1", "Azul", "5.0")]
        draws = plan_consumption(
            _order(("Azul", "7.0"), ("Preto", "1")), fabrics, StockPolicy.CLAMP
        )
        assert [d.fabric.color for d in draws] == ["Azul"]

    def test_does_not_mutate_fabrics(self):
        fabrics = [_fabric("1", "Azul", "10")]
        plan_consumption(_order(("Azul", "7")), fabrics)
        assert fabrics[0].stock == Rolls.of("10")


# ── FabricLedger ─────────────────────────────────────────────────────────────


class TestLedgerStrict:

    def test_consumes_and_persists(self):
        repo = FakeFabricRepository([_fabric("1", "Azul", "10"), _fabric("2", "Preto", "4")])
        FabricLedger(repo).consume_for_order(_order(("Azul", "7"), ("Preto", "3.5")))
        assert repo.get_by_id("1").stock == Rolls.of("3")
        assert repo.get_by_id("2").stock == Rolls.of("0.5")

    def test_shortage_leaves_every_record_untouched(self):
        repo = FakeFabricRepository([_fabric("1", "Azul", "10"), _fabric("2", "Preto", "5.0")])
        saves_before = repo.saves
        with pytest.raises(InsufficientStockError):
            FabricLedger(repo).consume_for_order(_order(("Azul", "7"), ("Preto", "7.0")))
        assert repo.get_by_id("1").stock == Rolls.of("10")
        assert repo.get_by_id("2").stock == Rolls.of("5.0")
        assert repo.saves == saves_before

    def test_fabric_lookup_ignores_case(self):
        repo = FakeFabricRepository([_fabric("1", "azul", "10", name="VISCOSE")])
        FabricLedger(repo).consume_for_order(_order(("Azul", "2")))
        assert repo.get_by_id("1").stock == Rolls.of("8")


class TestLedgerClamp:

    def test_floors_stock_at_zero(self, caplog):
        repo = FakeFabricRepository([_fabric("1", "Azul", "5.0")])
        ledger = FabricLedger(repo, StockPolicy.CLAMP)
        with caplog.at_level(logging.WARNING, logger="atelier.domain.service.fabric_ledger"):
            ledger.consume_for_order(_order(("Azul", "7.0")))
        assert repo.get_by_id("1").stock == NO_ROLLS
        assert "ran out" in caplog.text

    def test_covered_draw_logs_nothing(self, caplog):
        repo = FakeFabricRepository([_fabric("1", "Azul", "10")])
        with caplog.at_level(logging.WARNING):
            FabricLedger(repo, StockPolicy.CLAMP).consume_for_order(_order(("Azul", "7")))
        assert repo.get_by_id("1").stock == Rolls.of("3")
        assert caplog.records == []

    def test_policy_property(self):
        assert FabricLedger(FakeFabricRepository(), StockPolicy.CLAMP).policy is StockPolicy.CLAMP


class TestLedgerStockEntry:

    def test_add_stock(self):
        repo = FakeFabricRepository([_fabric("1", "Azul", "10.0")])
        fabric = FabricLedger(repo).add_stock("1", Rolls.of("3.2"))
        assert fabric.stock == Rolls.of("13.2")
        assert repo.get_by_id("1").stock == Rolls.of("13.2")
        assert repo.get_by_id("1").updated_at > T0

    def test_unknown_fabric(self):
        with pytest.raises(EntityNotFoundError):
            FabricLedger(FakeFabricRepository()).add_stock("42", Rolls.of(1))
