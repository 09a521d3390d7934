"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from atelier.domain.exceptions import ValidationError

# Size labels per grid, in display order.
SIZE_GRIDS: dict[str, tuple[str, ...]] = {
    "STANDARD": ("P", "M", "G", "GG"),
    "PLUS": ("G1", "G2", "G3"),
}
DEFAULT_GRID = "STANDARD"


def grid_sizes(grid: str) -> tuple[str, ...]:
    """Return the size labels of a named grid."""
    try:
        return SIZE_GRIDS[grid.upper()]
    except KeyError:
        raise ValidationError(
            f"Unknown size grid '{grid}' (expected one of {', '.join(SIZE_GRIDS)})"
        ) from None


@dataclass(frozen=True, order=True)
class Rolls:
    """A quantity of fabric measured in rolls.

    Fractional rolls are common (a partly used roll), so the amount is a
    Decimal: 10.0 + 3.2 must be exactly 13.2.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Rolls amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Rolls must be a finite amount, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Rolls cannot be negative, got {self.amount}")

    def __add__(self, other: Rolls) -> Rolls:
        return Rolls(self.amount + other.amount)

    def __sub__(self, other: Rolls) -> Rolls:
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Roll subtraction would result in a negative amount")
        return Rolls(result)

    def minus_clamped(self, other: Rolls) -> Rolls:
        """Subtract, flooring the result at zero."""
        return Rolls(max(Decimal("0"), self.amount - other.amount))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Rolls:
        """Coerce user input to Rolls. Accepts a decimal comma ("3,2")."""
        try:
            return Rolls(Decimal(str(amount).strip().replace(",", ".")))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid roll amount: {amount!r}") from exc


NO_ROLLS = Rolls(Decimal("0"))


@dataclass(frozen=True)
class SizeBreakdown:
    """Piece counts per garment size.

    Stored as ordered (size, quantity) pairs so grid order survives
    serialization. Quantities are never negative.
    """

    entries: tuple[tuple[str, int], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for size, qty in self.entries:
            if not size:
                raise ValidationError("Size label is required")
            if isinstance(qty, bool) or not isinstance(qty, int):
                raise ValidationError(
                    f"Quantity for size {size} must be an integer, "
                    f"got {type(qty).__name__}"
                )
            if qty < 0:
                raise ValidationError(f"Quantity for size {size} cannot be negative")
            if size in seen:
                raise ValidationError(f"Size {size} listed twice")
            seen.add(size)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(mapping: Mapping[str, int]) -> SizeBreakdown:
        return SizeBreakdown(tuple((str(k).strip(), v) for k, v in mapping.items()))

    @staticmethod
    def uniform(sizes: Iterable[str], quantity: int) -> SizeBreakdown:
        return SizeBreakdown(tuple((size, quantity) for size in sizes))

    # --- Queries --------------------------------------------------------------

    @property
    def sizes(self) -> tuple[str, ...]:
        return tuple(size for size, _ in self.entries)

    @property
    def total(self) -> int:
        return sum(qty for _, qty in self.entries)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def get(self, size: str) -> int:
        for label, qty in self.entries:
            if label == size:
                return qty
        return 0

    def as_dict(self) -> dict[str, int]:
        return dict(self.entries)

    # --- Arithmetic -----------------------------------------------------------

    def take(self, requested: SizeBreakdown) -> tuple[SizeBreakdown, SizeBreakdown]:
        """Move up to *requested* pieces out of this breakdown.

        Returns ``(taken, remaining)``. Each size moves at most what is on
        hand; sizes that are not on hand move nothing. ``taken`` lists only
        the sizes that actually moved, ``remaining`` keeps every size.
        """
        taken: list[tuple[str, int]] = []
        remaining: list[tuple[str, int]] = []
        for size, on_hand in self.entries:
            moved = min(on_hand, requested.get(size))
            if moved > 0:
                taken.append((size, moved))
            remaining.append((size, on_hand - moved))
        return SizeBreakdown(tuple(taken)), SizeBreakdown(tuple(remaining))

    def __str__(self) -> str:
        return " ".join(f"{size}:{qty}" for size, qty in self.entries) or "-"


@dataclass(frozen=True)
class ColorSwatch:
    """A named color plus the hex used to display it."""

    name: str
    hex: str = "#cccccc"

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Color name is required")
