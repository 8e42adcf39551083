"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from calorie_tracker.api.models import EntryCreate, FoodCreate, GoalUpdate
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.catalog import CatalogImportError
from calorie_tracker.domain.entries import Entry
from calorie_tracker.domain.summary import DailySummary
from calorie_tracker.services.tracker import TrackerService

EXPORT_FILENAME = "food-catalog.json"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.tracker.start()
        logger.info(
            "Tracker started for %s", app.state.container.tracker.active_key
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def state(request: Request) -> dict[str, object]:
        """Return the goal, catalog, today's log and derived totals."""
        return _state_payload(_tracker(request))

    @app.put("/goal")
    async def update_goal(payload: GoalUpdate, request: Request) -> dict[str, object]:
        """Replace the daily goal."""
        tracker = _tracker(request)
        accepted = tracker.set_goal(payload.goal)
        return {"accepted": accepted, "goal": tracker.goal}

    @app.post("/foods")
    async def add_food(payload: FoodCreate, request: Request) -> dict[str, object]:
        """Add a food to the catalog."""
        food = _tracker(request).add_food(payload.name, payload.kcal_per_100g)
        return {
            "accepted": food is not None,
            "food": food.to_payload() if food else None,
        }

    @app.delete("/foods/{food_id}")
    async def remove_food(food_id: str, request: Request) -> dict[str, bool]:
        """Remove a food from the catalog."""
        return {"removed": _tracker(request).remove_food(food_id)}

    @app.get("/foods/export")
    async def export_foods(request: Request) -> Response:
        """Download the catalog as a JSON document."""
        return Response(
            content=_tracker(request).export_catalog_json(),
            media_type="application/json",
            headers={
                "Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'
            },
        )

    @app.post("/foods/import")
    async def import_foods(request: Request) -> dict[str, int]:
        """Replace the catalog with an uploaded JSON document."""
        body = await request.body()
        try:
            foods = _tracker(request).import_catalog(body)
        except CatalogImportError as exc:
            logger.warning("Rejected catalog import: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"imported": len(foods)}

    @app.post("/entries")
    async def add_entry(payload: EntryCreate, request: Request) -> dict[str, object]:
        """Log an entry for today."""
        tracker = _tracker(request)
        entry: Entry | None = None
        if payload.food_id is not None:
            entry = tracker.add_entry_from_catalog(payload.food_id, payload.grams)
        elif payload.name is not None:
            entry = tracker.add_custom_entry(payload.name, payload.kcal)
        return {
            "accepted": entry is not None,
            "entry": entry.to_payload() if entry else None,
            "summary": _summary_payload(tracker.summary()),
        }

    @app.delete("/entries/{entry_id}")
    async def remove_entry(entry_id: str, request: Request) -> dict[str, bool]:
        """Remove an entry from today's log."""
        return {"removed": _tracker(request).remove_entry(entry_id)}

    @app.delete("/entries")
    async def reset_entries(request: Request) -> dict[str, object]:
        """Clear today's log."""
        tracker = _tracker(request)
        tracker.reset_entries()
        return _state_payload(tracker)

    return app


def _tracker(request: Request) -> TrackerService:
    container: AppContainer = request.app.state.container
    return container.tracker


def _state_payload(tracker: TrackerService) -> dict[str, object]:
    return {
        "goal": tracker.goal,
        "dayKey": tracker.active_key,
        "foods": [food.to_payload() for food in tracker.sorted_foods()],
        "entries": [entry.to_payload() for entry in tracker.entries],
        "summary": _summary_payload(tracker.summary()),
    }


def _summary_payload(summary: DailySummary) -> dict[str, object]:
    return {
        "totalKcal": summary.total_kcal,
        "remainingKcal": summary.remaining_kcal,
        "overLimit": summary.over_limit,
        "progressPercent": summary.progress_percent,
    }
