"""ProductReference aggregate.

References live independently of orders. Orders copy the reference code
and description when they are created, so catalog maintenance never
rewrites an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from atelier.domain.exceptions import ValidationError
from atelier.domain.model.value_objects import DEFAULT_GRID, ColorSwatch, grid_sizes


@dataclass
class ProductReference:
    """A catalog entry describing a garment model."""

    id: str | None
    code: str
    description: str = ""
    default_fabric: str = ""
    default_colors: list[ColorSwatch] = field(default_factory=list)
    estimated_pieces_per_roll: int = 0
    default_grid: str = DEFAULT_GRID

    @staticmethod
    def create(
        code: str,
        description: str = "",
        default_fabric: str = "",
        default_colors: list[ColorSwatch] | None = None,
        estimated_pieces_per_roll: int = 0,
        default_grid: str = DEFAULT_GRID,
    ) -> ProductReference:
        """Create a new reference, enforcing all invariants."""
        product = ProductReference(id=None, code="")
        product.update(
            code=code,
            description=description,
            default_fabric=default_fabric,
            default_colors=default_colors or [],
            estimated_pieces_per_roll=estimated_pieces_per_roll,
            default_grid=default_grid,
        )
        return product

    def update(
        self,
        code: str,
        description: str,
        default_fabric: str,
        default_colors: list[ColorSwatch],
        estimated_pieces_per_roll: int,
        default_grid: str,
    ) -> None:
        if not code or not code.strip():
            raise ValidationError("Reference code is required")
        if estimated_pieces_per_roll < 0:
            raise ValidationError("Estimated pieces per roll cannot be negative")
        grid_sizes(default_grid)

        names = [c.name.strip().lower() for c in default_colors]
        if len(names) != len(set(names)):
            raise ValidationError("Default colors must be distinct")

        self.code = code.strip()
        self.description = description.strip()
        self.default_fabric = default_fabric.strip()
        self.default_colors = list(default_colors)
        self.estimated_pieces_per_roll = estimated_pieces_per_roll
        self.default_grid = default_grid.upper()
