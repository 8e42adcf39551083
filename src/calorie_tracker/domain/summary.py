"""Domain models for derived daily totals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailySummary:
    """Totals for the active day compared against the goal."""

    goal: float
    total_kcal: int
    remaining_kcal: float
    over_limit: bool
    progress_percent: float
