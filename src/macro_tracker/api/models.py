"""Request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field, model_validator


class UserCreate(BaseModel):
    """Payload for registering a user."""

    username: str = Field(min_length=1)


class GoalsUpdate(BaseModel):
    """New macro goals, optionally effective from a given date."""

    calories: float = Field(gt=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    effective_date: date | None = None


class ProductPayload(BaseModel):
    """Product values for the reference quantity."""

    name: str = Field(min_length=1)
    reference_grams: float = Field(gt=0)
    quantity: int | None = Field(default=None, ge=1)
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)


class ProductTotalsPayload(BaseModel):
    """Totals for several units of a product, stored per unit."""

    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    total_grams: float = Field(gt=0)
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)


class MealCreate(BaseModel):
    """Payload for creating a meal on a date."""

    day: date
    name: str | None = None


class MealItemCreate(BaseModel):
    """A product eaten as part of a meal, by grams or by units."""

    product_id: int
    grams: float | None = Field(default=None, gt=0)
    units: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _one_amount(self) -> "MealItemCreate":
        if (self.grams is None) == (self.units is None):
            raise ValueError("Provide either grams or units")
        return self
