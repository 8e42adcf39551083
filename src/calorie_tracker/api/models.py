"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class GoalUpdate(BaseModel):
    """New daily goal."""

    goal: float | str


class FoodCreate(BaseModel):
    """Catalog item as entered by the user."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kcal_per_100g: float | str = Field(alias="kcalPer100g")


class EntryCreate(BaseModel):
    """Entry to log, either from the catalog or free-form."""

    model_config = ConfigDict(populate_by_name=True)

    food_id: str | None = Field(default=None, alias="foodId")
    grams: float | str | None = None
    name: str | None = None
    kcal: float | str | None = None
