"""Derived totals for the active day."""

from collections.abc import Iterable

from calorie_tracker.domain.entries import Entry
from calorie_tracker.domain.summary import DailySummary

MAX_PROGRESS_PERCENT = 100.0


def summarize(goal: float, entries: Iterable[Entry]) -> DailySummary:
    """Compute consumed, remaining, over-limit and progress for a day."""
    total = sum(entry.kcal for entry in entries)
    if goal > 0:
        progress = min(MAX_PROGRESS_PERCENT, total * 100 / goal)
    else:
        progress = MAX_PROGRESS_PERCENT if total > 0 else 0.0
    return DailySummary(
        goal=goal,
        total_kcal=total,
        remaining_kcal=max(0, goal - total),
        over_limit=total > goal,
        progress_percent=progress,
    )
