"""Product catalogue endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from macro_tracker.api.dependencies import require_token
from macro_tracker.api.models import ProductPayload, ProductTotalsPayload
from macro_tracker.api.serializers import serialize_product
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.products import ProductDraft

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(
    prefix="/products", tags=["products"], dependencies=[Depends(require_token)]
)


@router.get("")
async def list_products(request: Request, q: str | None = None) -> dict[str, object]:
    """Return products, optionally filtered by name."""
    container: AppContainer = request.app.state.container
    products = container.product_service.search_products(q)
    return {"products": [serialize_product(product) for product in products]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductPayload, request: Request
) -> dict[str, object]:
    """Create a product from per-reference-quantity values."""
    container: AppContainer = request.app.state.container
    product = container.product_service.create_product(
        ProductDraft(**payload.model_dump())
    )
    return serialize_product(product)


@router.post("/from-totals", status_code=status.HTTP_201_CREATED)
async def create_product_from_totals(
    payload: ProductTotalsPayload, request: Request
) -> dict[str, object]:
    """Create a product from totals entered for several units."""
    container: AppContainer = request.app.state.container
    product = container.product_service.create_from_totals(
        name=payload.name,
        quantity=payload.quantity,
        total_grams=payload.total_grams,
        totals=MacroTotals(
            calories=payload.calories,
            protein_g=payload.protein_g,
            carbs_g=payload.carbs_g,
            fat_g=payload.fat_g,
        ),
    )
    return serialize_product(product)


@router.get("/{product_id}")
async def get_product(product_id: int, request: Request) -> dict[str, object]:
    """Return a product."""
    container: AppContainer = request.app.state.container
    return serialize_product(container.product_service.get_product(product_id))


@router.put("/{product_id}")
async def update_product(
    product_id: int, payload: ProductPayload, request: Request
) -> dict[str, object]:
    """Replace a product's values."""
    container: AppContainer = request.app.state.container
    product = container.product_service.update_product(
        product_id, ProductDraft(**payload.model_dump())
    )
    return serialize_product(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, request: Request) -> None:
    """Delete a product."""
    container: AppContainer = request.app.state.container
    container.product_service.delete_product(product_id)
