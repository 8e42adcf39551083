"""Validation models for catalog documents and persisted records."""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictStr,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from calorie_tracker.domain.entries import Entry
from calorie_tracker.domain.foods import FoodItem

Kcal = Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)]


class CatalogImportError(ValueError):
    """Raised when an imported catalog document fails validation."""


class CatalogFood(BaseModel):
    """Catalog item as it appears in persisted and exported documents."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    name: StrictStr = Field(min_length=1)
    kcal_per_100g: Kcal = Field(alias="kcalPer100g")

    def to_domain(self) -> FoodItem:
        """Convert to the domain model."""
        return FoodItem(id=self.id, name=self.name, kcal_per_100g=self.kcal_per_100g)


class CatalogDocument(RootModel[list[CatalogFood]]):
    """A full catalog: a JSON array of foods with unique ids."""

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "CatalogDocument":
        seen: set[str] = set()
        for food in self.root:
            if food.id in seen:
                raise ValueError(f"duplicate food id {food.id!r}")
            seen.add(food.id)
        return self

    def to_domain(self) -> list[FoodItem]:
        """Convert to domain models, keeping document order."""
        return [food.to_domain() for food in self.root]


class StoredEntry(BaseModel):
    """Entry as persisted under a day key."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    name: StrictStr
    kcal: int = Field(ge=0)
    food_id: StrictStr | None = Field(default=None, alias="foodId")
    grams: float | None = Field(default=None, gt=0, allow_inf_nan=False)

    def to_domain(self) -> Entry:
        """Convert to the domain model."""
        return Entry(
            id=self.id,
            name=self.name,
            kcal=self.kcal,
            food_id=self.food_id,
            grams=self.grams,
        )


STORED_FOODS = TypeAdapter(list[CatalogFood])
STORED_ENTRIES = TypeAdapter(list[StoredEntry])
STORED_GOAL = TypeAdapter(Kcal)


def parse_catalog_document(payload: object) -> list[FoodItem]:
    """Validate an import payload and return the foods it describes."""
    try:
        document = CatalogDocument.model_validate(payload)
    except ValidationError as exc:
        raise CatalogImportError(_describe(exc)) from exc
    return document.to_domain()


def _describe(exc: ValidationError) -> str:
    """Summarise the first validation problem for display."""
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    if location:
        return f"Invalid catalog at {location}: {error['msg']}"
    return f"Invalid catalog: {error['msg']}"
