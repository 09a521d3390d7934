"""Fabric aggregate — stock of one fabric in one color.

A fabric record is keyed by (name, color) and shared by every order that
cuts it. Stock is measured in rolls and can never go below zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from atelier.domain.exceptions import InsufficientStockError, Shortage, ValidationError
from atelier.domain.model.value_objects import NO_ROLLS, Rolls


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Fabric:
    """Aggregate root for fabric stock.

    Invariant: ``stock`` is never negative. ``Rolls`` already refuses
    negative amounts, so every mutation either floors at zero or raises
    before touching the record.
    """

    id: str | None
    name: str
    color: str
    color_hex: str = "#cccccc"
    stock: Rolls = NO_ROLLS
    notes: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @staticmethod
    def register(
        name: str,
        color: str,
        stock: Rolls = NO_ROLLS,
        color_hex: str = "#cccccc",
        notes: str = "",
    ) -> Fabric:
        """Create a new fabric record."""
        if not name or not name.strip():
            raise ValidationError("Fabric name is required")
        if not color or not color.strip():
            raise ValidationError("Fabric color is required")
        return Fabric(
            id=None,
            name=name.strip(),
            color=color.strip(),
            color_hex=color_hex or "#cccccc",
            stock=stock,
            notes=notes or "",
        )

    def matches(self, name: str, color: str) -> bool:
        """Case-insensitive (name, color) identity check."""
        return (
            self.name.strip().lower() == name.strip().lower()
            and self.color.strip().lower() == color.strip().lower()
        )

    @property
    def label(self) -> str:
        return f"{self.name}/{self.color}"

    # --- Mutations ------------------------------------------------------------

    def add_stock(self, delta: Rolls, now: datetime | None = None) -> None:
        """Record a stock entry. Strictly additive."""
        if delta.is_zero:
            raise ValidationError("Stock entry must be greater than zero")
        self.stock = self.stock + delta
        self.updated_at = now or _utcnow()

    def consume(self, rolls: Rolls, now: datetime | None = None) -> None:
        """Take rolls out of stock, refusing to go below zero."""
        if rolls > self.stock:
            raise InsufficientStockError(
                [Shortage(self.name, self.color, rolls.amount, self.stock.amount)]
            )
        self.stock = self.stock - rolls
        self.updated_at = now or _utcnow()

    def consume_clamped(self, rolls: Rolls, now: datetime | None = None) -> Rolls:
        """Take rolls out of stock, flooring at zero.

        Returns the amount that could not be covered (zero when stock was
        sufficient).
        """
        uncovered = rolls.minus_clamped(self.stock)
        self.stock = self.stock.minus_clamped(rolls)
        self.updated_at = now or _utcnow()
        return uncovered

    def revise(self, color_hex: str | None = None, notes: str | None = None) -> None:
        """Edit the descriptive fields. Stock only moves via entries and cuts."""
        if color_hex is not None:
            self.color_hex = color_hex
        if notes is not None:
            self.notes = notes
        self.updated_at = _utcnow()
