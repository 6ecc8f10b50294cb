"""Supabase implementation for the product catalogue."""

from dataclasses import asdict, dataclass

from supabase import Client

from macro_tracker.domain.errors import StorageFailure
from macro_tracker.domain.products import Product, ProductDraft
from macro_tracker.services.products import ProductRepository


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase-backed repository for products."""

    client: Client

    def create_product(self, draft: ProductDraft) -> Product:
        """Create a product row and return it."""
        response = self.client.table("products").insert(asdict(draft)).execute()
        if not response.data:
            raise StorageFailure("Failed to create product")
        return _parse_product(response.data[0])

    def update_product(self, product_id: int, draft: ProductDraft) -> Product | None:
        """Update a product row and return it."""
        response = (
            self.client.table("products")
            .update(asdict(draft))
            .eq("id", product_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def delete_product(self, product_id: int) -> None:
        """Delete a product row."""
        self.client.table("products").delete().eq("id", product_id).execute()

    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id, if present."""
        response = (
            self.client.table("products")
            .select("*")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def list_products(self) -> list[Product]:
        """Return all products ordered by name."""
        response = (
            self.client.table("products")
            .select("*")
            .order("name", desc=False)
            .execute()
        )
        return [_parse_product(row) for row in response.data or []]

    def list_products_by_ids(self, product_ids: list[int]) -> dict[int, Product]:
        """Return products for the given ids keyed by id."""
        if not product_ids:
            return {}
        response = (
            self.client.table("products")
            .select("*")
            .in_("id", list(product_ids))
            .execute()
        )
        products = [_parse_product(row) for row in response.data or []]
        return {product.id: product for product in products}


def _parse_product(row: dict[str, object]) -> Product:
    """Parse a product row into a domain model."""
    quantity = row.get("quantity")
    return Product(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        reference_grams=float(row.get("reference_grams", 0.0)),
        quantity=int(quantity) if quantity is not None else None,
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
    )
