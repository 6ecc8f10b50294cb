"""Scaling of stored product macros to consumed amounts.

Calories are rounded to whole numbers and gram-based macros to one decimal.
Rounding is half-up so values match the records the tracker has always
produced, which rules out Python's built-in ``round``.
"""

import math

from macro_tracker.domain.errors import PreconditionViolation
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.products import Product


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves going up.

    Raises PreconditionViolation when the value is too large to round.
    """
    factor = 10**digits
    shifted = value * factor + 0.5
    if not math.isfinite(shifted):
        raise PreconditionViolation(f"Value out of range: {value}")
    return math.floor(shifted) / factor


def scale(product: Product, consumed_grams: float) -> MacroTotals:
    """Return the macros contributed by ``consumed_grams`` of ``product``."""
    if product.reference_grams <= 0:
        raise PreconditionViolation(
            f"Product {product.id} has non-positive reference grams"
        )
    if consumed_grams <= 0:
        raise PreconditionViolation("Consumed grams must be positive")
    ratio = consumed_grams / product.reference_grams
    return MacroTotals(
        calories=round_half_up(product.calories * ratio),
        protein_g=round_half_up(product.protein_g * ratio, 1),
        carbs_g=round_half_up(product.carbs_g * ratio, 1),
        fat_g=round_half_up(product.fat_g * ratio, 1),
    )


def grams_for_quantity(product: Product, units: float) -> float:
    """Convert a count of product units into consumed grams."""
    if units <= 0:
        raise PreconditionViolation("Quantity must be positive")
    return units * product.reference_grams


def normalize_product_totals(
    totals: MacroTotals, total_grams: float, quantity: int
) -> tuple[float, MacroTotals]:
    """Split totals entered for ``quantity`` units into per-unit values.

    Returns the per-unit reference grams and macros. Grams and calories keep one
    decimal, the other macros two.
    """
    if quantity < 1:
        raise PreconditionViolation("Quantity must be at least 1")
    if total_grams <= 0:
        raise PreconditionViolation("Total grams must be positive")
    per_unit = MacroTotals(
        calories=round_half_up(totals.calories / quantity, 1),
        protein_g=round_half_up(totals.protein_g / quantity, 2),
        carbs_g=round_half_up(totals.carbs_g / quantity, 2),
        fat_g=round_half_up(totals.fat_g / quantity, 2),
    )
    return round_half_up(total_grams / quantity, 1), per_unit
