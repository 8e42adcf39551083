"""Domain models for the food catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodItem:
    """A named food with a fixed calorie density per 100 grams."""

    id: str
    name: str
    kcal_per_100g: float

    def to_payload(self) -> dict[str, object]:
        """Return the persisted/exported representation."""
        return {"id": self.id, "name": self.name, "kcalPer100g": self.kcal_per_100g}
