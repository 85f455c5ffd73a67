"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Annotated
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.models import DashboardResponse, EntryCreate, TotalsResponse
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_timezone
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.entries import FoodEntry, FoodEstimate, MealType
from calorie_tracker.domain.profiles import NutritionProfile, ProfileUpdate
from calorie_tracker.domain.stats import DailyDashboard
from calorie_tracker.errors import RecognitionError, StoreError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(RecognitionError)
    async def recognition_error_handler(
        _request: Request, exc: RecognitionError
    ) -> JSONResponse:
        logger.error("Recognition error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/profile")
    async def get_profile(
        user_id: UUID, request: Request, email: str = ""
    ) -> NutritionProfile:
        """Return the user's profile, or an empty one if none is stored."""
        state_container: AppContainer = request.app.state.container
        return state_container.profile_service.get_profile(user_id, email=email)

    @app.put("/users/{user_id}/profile")
    async def save_profile(
        user_id: UUID, changes: ProfileUpdate, request: Request, email: str = ""
    ) -> NutritionProfile:
        """Save profile edits and refresh the daily calorie target."""
        state_container: AppContainer = request.app.state.container
        return state_container.profile_service.save_profile(
            user_id, changes, email=email
        )

    @app.get("/users/{user_id}/dashboard")
    async def dashboard(
        user_id: UUID, request: Request, timezone: str | None = None
    ) -> DashboardResponse:
        """Return today's totals and calorie progress."""
        state_container: AppContainer = request.app.state.container
        tz = parse_timezone(timezone, state_container.settings.default_timezone)
        summary = state_container.stats_service.get_dashboard(
            user_id, state_container.clock(), tz
        )
        return _dashboard_response(summary)

    @app.get("/users/{user_id}/entries")
    async def history(
        user_id: UUID,
        request: Request,
        search: str | None = None,
        meal_type: MealType | None = None,
        limit: Annotated[int | None, Query(ge=1)] = None,
    ) -> dict[str, list[FoodEntry]]:
        """Return recent entries filtered by name and meal type."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.history_service.get_history(
            user_id, search_text=search, meal_type=meal_type, limit=limit
        )
        return {"entries": entries}

    @app.post("/users/{user_id}/entries", status_code=status.HTTP_201_CREATED)
    async def log_entry(
        user_id: UUID, payload: EntryCreate, request: Request
    ) -> FoodEntry:
        """Log an accepted estimate as a new food entry."""
        state_container: AppContainer = request.app.state.container
        return state_container.entry_service.accept_estimate(
            user_id,
            payload.estimate,
            payload.meal_type,
            now=state_container.clock(),
            image_url=payload.image_url,
        )

    @app.delete(
        "/users/{user_id}/entries/{entry_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_entry(user_id: UUID, entry_id: UUID, request: Request) -> None:
        """Delete a logged entry."""
        state_container: AppContainer = request.app.state.container
        if not state_container.entry_service.delete_entry(user_id, entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.post("/recognitions")
    async def recognize(request: Request) -> FoodEstimate:
        """Estimate nutrition from raw image bytes in the request body."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Image is empty"
            )
        return await state_container.recognition_service.analyze(image_bytes)

    return app


def _dashboard_response(summary: DailyDashboard) -> DashboardResponse:
    return DashboardResponse(
        day=summary.day,
        totals=TotalsResponse(**asdict(summary.totals)),
        target_calories=summary.progress.target,
        progress=summary.progress.progress,
        remaining_calories=summary.progress.remaining,
        over_target_calories=summary.progress.over_target,
        skipped_entries=summary.skipped,
    )
