"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from calorie_snap.api.models import (
    AnalyzeRequest,
    ChatRequest,
    DailyLogResponse,
    MacroTotalsModel,
    OnboardingRequest,
    WaterRequest,
)
from calorie_snap.app_logging import configure_logging
from calorie_snap.containers import AppContainer
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.nutrition import build_analysis
from calorie_snap.domain.profile import UserProfile
from calorie_snap.domain.state import NutritionAnalysisModel
from calorie_snap.services.analysis import build_context
from calorie_snap.services.logs import DuplicateMealError
from calorie_snap.services.state import (
    analysis_from_model,
    analysis_model,
    message_model,
    profile_model,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the onboarded profile."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(state_container)
        return _dump(profile_model(profile))

    @app.post("/profile")
    async def complete_onboarding(
        body: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Compute targets and store the profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.complete_onboarding(
            name=body.name,
            age=body.age,
            weight=body.weight,
            height=body.height,
            gender=body.gender,
            activity_level=body.activity_level,
            goal=body.goal,
        )
        state_container.save_state()
        return _dump(profile_model(profile))

    @app.post("/meals/analyze")
    async def analyze_meal(body: AnalyzeRequest, request: Request) -> dict[str, object]:
        """Estimate a meal without logging it."""
        state_container: AppContainer = request.app.state.container
        context = build_context(
            state_container.profile_service.get_profile(),
            state_container.meal_log_service.today(),
        )
        analysis = await state_container.analysis_service.analyze(
            body.description,
            image_base64=body.image,
            mime_type=body.mime_type,
            context=context,
        )
        return _dump(analysis_model(analysis))

    @app.post("/meals")
    async def add_meal(
        body: NutritionAnalysisModel, request: Request
    ) -> dict[str, object]:
        """Add an analyzed meal to today's diary."""
        state_container: AppContainer = request.app.state.container
        submitted = analysis_from_model(body)
        analysis = build_analysis(
            analysis_id=submitted.id,
            timestamp=submitted.timestamp,
            food_items=submitted.food_items,
            health_tips=submitted.health_tips,
            dietary_tags=submitted.dietary_tags,
            meal_type=submitted.meal_type,
        )
        try:
            log = state_container.meal_log_service.add_meal(analysis)
        except DuplicateMealError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        state_container.save_state()
        return _dump(_log_response(log))

    @app.post("/meals/undo")
    async def undo_meal(request: Request) -> dict[str, object]:
        """Undo the most recent add while its window is open."""
        state_container: AppContainer = request.app.state.container
        log = state_container.meal_log_service.undo()
        if log is None:
            return {
                "undone": False,
                "log": _dump(_log_response(state_container.meal_log_service.today())),
            }
        state_container.save_state()
        return {"undone": True, "log": _dump(_log_response(log))}

    @app.delete("/meals/{meal_id}")
    async def delete_meal(
        meal_id: str, request: Request, day: str | None = None
    ) -> dict[str, object]:
        """Delete a meal from a day's log."""
        state_container: AppContainer = request.app.state.container
        try:
            log = state_container.meal_log_service.delete_meal(meal_id, day)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        state_container.save_state()
        return _dump(_log_response(log))

    @app.post("/water")
    async def add_water(body: WaterRequest, request: Request) -> dict[str, object]:
        """Add water to today's log."""
        state_container: AppContainer = request.app.state.container
        log = state_container.meal_log_service.add_water(body.amount)
        state_container.save_state()
        return _dump(_log_response(log))

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return today's log with recomputed totals."""
        state_container: AppContainer = request.app.state.container
        return _dump(_log_response(state_container.meal_log_service.today()))

    @app.get("/coach/messages")
    async def list_messages(request: Request) -> dict[str, object]:
        """Return the chat history."""
        state_container: AppContainer = request.app.state.container
        return {
            "messages": [
                _dump(message_model(message))
                for message in state_container.coach_service.history
            ]
        }

    @app.post("/coach/messages")
    async def send_message(body: ChatRequest, request: Request) -> dict[str, object]:
        """Ask the coach a question."""
        state_container: AppContainer = request.app.state.container
        profile = _require_profile(state_container)
        reply = await state_container.coach_service.send(
            body.text, profile, state_container.meal_log_service.today()
        )
        state_container.save_state()
        logger.debug("Coach replied with %s characters", len(reply.text))
        return _dump(message_model(reply))

    return app


def _require_profile(state_container: AppContainer) -> UserProfile:
    profile = state_container.profile_service.get_profile()
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Onboarding not completed"
        )
    return profile


def _log_response(log: DailyLog) -> DailyLogResponse:
    totals = log.totals()
    return DailyLogResponse(
        date=log.date,
        meals=[analysis_model(meal) for meal in log.meals],
        water_intake=log.water_intake_ml,
        totals=MacroTotalsModel(
            calories=totals.calories,
            protein=totals.protein_g,
            fat=totals.fat_g,
            carbs=totals.carbs_g,
        ),
    )


def _dump(model: BaseModel) -> dict[str, object]:
    return model.model_dump(by_alias=True, mode="json")
