"""Domain models for the shared product catalogue."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A food product with macros for its reference quantity."""

    id: int
    name: str
    reference_grams: float
    quantity: int | None
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class ProductDraft:
    """Product values before they are stored."""

    name: str
    reference_grams: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    quantity: int | None = None
