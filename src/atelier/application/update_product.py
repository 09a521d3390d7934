"""Application service: Update / Delete Product Reference use cases.

Catalog maintenance never touches existing orders: they copied the
reference code and description when they were planned.
"""

from __future__ import annotations

from atelier.application.add_product import to_swatches
from atelier.domain.exceptions import EntityNotFoundError, ValidationError
from atelier.domain.model.product import ProductReference
from atelier.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        code: str | None = None,
        description: str | None = None,
        default_fabric: str | None = None,
        colors: list[tuple[str, str]] | None = None,
        pieces_per_roll: int | None = None,
        grid: str | None = None,
    ) -> ProductReference:
        """Change any subset of a reference's fields."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product reference #{product_id} not found")

        if code is not None:
            clash = self._product_repo.get_by_code(code)
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Reference '{code}' already exists")

        product.update(
            code=product.code if code is None else code,
            description=product.description if description is None else description,
            default_fabric=(
                product.default_fabric if default_fabric is None else default_fabric
            ),
            default_colors=product.default_colors if colors is None else to_swatches(colors),
            estimated_pieces_per_roll=(
                product.estimated_pieces_per_roll
                if pieces_per_roll is None
                else pieces_per_roll
            ),
            default_grid=product.default_grid if grid is None else grid,
        )
        self._product_repo.save(product)
        return product


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        self._product_repo.delete(product_id)
