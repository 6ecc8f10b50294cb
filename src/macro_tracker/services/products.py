"""Services for managing the shared product catalogue."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from macro_tracker.domain.errors import NotFound, PreconditionViolation
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.products import Product, ProductDraft
from macro_tracker.services.scaling import normalize_product_totals

_logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    """Persistence interface for products."""

    def create_product(self, draft: ProductDraft) -> Product:
        """Create a product and return it."""

    def update_product(self, product_id: int, draft: ProductDraft) -> Product | None:
        """Update a product and return it, or None when it does not exist."""

    def delete_product(self, product_id: int) -> None:
        """Delete a product."""

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""

    def list_products(self) -> list[Product]:
        """Return all products ordered by name."""

    def list_products_by_ids(self, product_ids: list[int]) -> dict[int, Product]:
        """Return existing products keyed by id; missing ids are absent."""


@dataclass
class ProductService:
    """Application service for product catalogue operations."""

    repository: ProductRepository

    def create_product(self, draft: ProductDraft) -> Product:
        """Validate and store a product."""
        cleaned = _validate(draft)
        product = self.repository.create_product(cleaned)
        _logger.info("Product created: id=%s name=%s", product.id, product.name)
        return product

    def create_from_totals(
        self, name: str, quantity: int, total_grams: float, totals: MacroTotals
    ) -> Product:
        """Store a product entered as totals for several units, per unit."""
        grams, per_unit = normalize_product_totals(totals, total_grams, quantity)
        return self.create_product(
            ProductDraft(
                name=name,
                reference_grams=grams,
                quantity=quantity,
                calories=per_unit.calories,
                protein_g=per_unit.protein_g,
                carbs_g=per_unit.carbs_g,
                fat_g=per_unit.fat_g,
            )
        )

    def update_product(self, product_id: int, draft: ProductDraft) -> Product:
        """Validate and update a product."""
        updated = self.repository.update_product(product_id, _validate(draft))
        if updated is None:
            raise NotFound("product", product_id)
        return updated

    def delete_product(self, product_id: int) -> None:
        """Delete a product; meal items referring to it become orphaned."""
        self.get_product(product_id)
        self.repository.delete_product(product_id)
        _logger.info("Product deleted: id=%s", product_id)

    def get_product(self, product_id: int) -> Product:
        """Return a product or raise NotFound."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise NotFound("product", product_id)
        return product

    def list_products(self) -> list[Product]:
        """Return every product."""
        return self.repository.list_products()

    def products_by_ids(self, product_ids: list[int]) -> dict[int, Product]:
        """Return the products that still exist among ``product_ids``."""
        return self.repository.list_products_by_ids(product_ids)

    def search_products(self, query: str | None) -> list[Product]:
        """Case-insensitive substring search on product names."""
        products = self.repository.list_products()
        if not query or not query.strip():
            return products
        needle = query.strip().lower()
        return [product for product in products if needle in product.name.lower()]


def _validate(draft: ProductDraft) -> ProductDraft:
    name = draft.name.strip()
    if not name:
        raise PreconditionViolation("Product name is required")
    if draft.reference_grams <= 0:
        raise PreconditionViolation("Reference grams must be positive")
    if draft.quantity is not None and draft.quantity < 1:
        raise PreconditionViolation("Quantity must be at least 1")
    if min(draft.calories, draft.protein_g, draft.carbs_g, draft.fat_g) < 0:
        raise PreconditionViolation("Macros cannot be negative")
    return replace(draft, name=name)
