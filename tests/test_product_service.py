"""Tests for product service."""

import pytest

from macro_tracker.domain.errors import NotFound, PreconditionViolation
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.products import ProductDraft
from macro_tracker.services.products import ProductService
from tests.conftest import InMemoryProductRepository


def _draft(**overrides: object) -> ProductDraft:
    values = {
        "name": "Greek Yogurt",
        "reference_grams": 100,
        "calories": 60,
        "protein_g": 10,
        "carbs_g": 4,
        "fat_g": 0,
    }
    values.update(overrides)
    return ProductDraft(**values)


def test_create_product_trims_name() -> None:
    service = ProductService(InMemoryProductRepository())

    product = service.create_product(_draft(name="  Greek Yogurt "))

    assert product.name == "Greek Yogurt"
    assert service.get_product(product.id) == product


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": " "},
        {"reference_grams": 0},
        {"reference_grams": -10},
        {"quantity": 0},
        {"calories": -1},
    ],
)
def test_create_product_rejects_invalid_values(overrides: dict[str, object]) -> None:
    service = ProductService(InMemoryProductRepository())

    with pytest.raises(PreconditionViolation):
        service.create_product(_draft(**overrides))


def test_create_from_totals_stores_per_unit_values() -> None:
    service = ProductService(InMemoryProductRepository())

    product = service.create_from_totals(
        name="Egg",
        quantity=2,
        total_grams=100,
        totals=MacroTotals(calories=143, protein_g=12.6, carbs_g=0.7, fat_g=9.5),
    )

    assert product.reference_grams == 50
    assert product.quantity == 2
    assert product.calories == 71.5
    assert product.fat_g == 4.75


def test_search_products_is_case_insensitive() -> None:
    service = ProductService(InMemoryProductRepository())
    service.create_product(_draft(name="Chicken Breast"))
    service.create_product(_draft(name="Rice"))

    assert [p.name for p in service.search_products("chick")] == ["Chicken Breast"]
    assert len(service.search_products(None)) == 2


def test_update_and_delete_missing_product_raise_not_found() -> None:
    service = ProductService(InMemoryProductRepository())

    with pytest.raises(NotFound):
        service.update_product(5, _draft())
    with pytest.raises(NotFound):
        service.delete_product(5)


def test_update_product_replaces_values() -> None:
    service = ProductService(InMemoryProductRepository())
    product = service.create_product(_draft())

    updated = service.update_product(product.id, _draft(calories=70))

    assert updated.calories == 70
