"""Application service: Add Product Reference use case."""

from __future__ import annotations

from atelier.domain.exceptions import ValidationError
from atelier.domain.model.product import ProductReference
from atelier.domain.model.value_objects import DEFAULT_GRID, ColorSwatch
from atelier.domain.repository.product_repository import ProductRepository


def to_swatches(colors: list[tuple[str, str]]) -> list[ColorSwatch]:
    return [ColorSwatch(name=name.strip(), hex=hex_ or "#cccccc") for name, hex_ in colors]


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        code: str,
        description: str = "",
        default_fabric: str = "",
        colors: list[tuple[str, str]] | None = None,
        pieces_per_roll: int = 0,
        grid: str = DEFAULT_GRID,
    ) -> ProductReference:
        """Add a new reference to the catalog."""
        if code and self._product_repo.get_by_code(code) is not None:
            raise ValidationError(f"Reference '{code}' already exists")

        product = ProductReference.create(
            code=code,
            description=description,
            default_fabric=default_fabric,
            default_colors=to_swatches(colors or []),
            estimated_pieces_per_roll=pieces_per_roll,
            default_grid=grid,
        )
        self._product_repo.save(product)
        return product
