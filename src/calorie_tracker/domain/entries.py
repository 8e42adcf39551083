"""Domain models for the daily log."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """A logged consumption event with its calories fixed at creation."""

    id: str
    name: str
    kcal: int
    food_id: str | None = None
    grams: float | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the persisted representation, omitting absent fields."""
        payload: dict[str, object] = {"id": self.id}
        if self.food_id is not None:
            payload["foodId"] = self.food_id
        payload["name"] = self.name
        if self.grams is not None:
            payload["grams"] = self.grams
        payload["kcal"] = self.kcal
        return payload
