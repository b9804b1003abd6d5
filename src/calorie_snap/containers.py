"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from calorie_snap.adapters.file_state_repository import FileStateRepository
from calorie_snap.adapters.openai_coach_client import OpenAICoachClient
from calorie_snap.adapters.openai_nutrition_client import OpenAINutritionClient
from calorie_snap.adapters.supabase_state_repository import SupabaseStateRepository
from calorie_snap.config import Settings, parse_state_backend
from calorie_snap.services.advice import AdviceResponder
from calorie_snap.services.analysis import AnalysisService
from calorie_snap.services.coach import CoachService
from calorie_snap.services.estimation import NutritionEstimator
from calorie_snap.services.logs import DailyLogStore
from calorie_snap.services.meals import MealLogService
from calorie_snap.services.profile import ProfileService
from calorie_snap.services.state import (
    AppState,
    StateLoadError,
    StateRepository,
    StateService,
)
from calorie_snap.services.undo import AsyncioScheduler, UndoCoordinator

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state_service: StateService
    profile_service: ProfileService
    analysis_service: AnalysisService
    meal_log_service: MealLogService
    coach_service: CoachService
    save_state: Callable[[], None]
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    state_repository: StateRepository | None = None,
) -> AppContainer:
    """Create the default dependency container and load stored state."""
    resolved_settings = settings or Settings()
    repository = state_repository or _build_state_repository(resolved_settings)
    state_service = StateService(repository, key=resolved_settings.state_key)
    state = _load_state(state_service)

    estimator = NutritionEstimator()
    nutrition_client = None
    coach_client = None
    if resolved_settings.openai_api_key:
        if resolved_settings.remote_estimation:
            nutrition_client = OpenAINutritionClient.create(
                resolved_settings.openai_api_key
            )
        if resolved_settings.remote_coach:
            coach_client = OpenAICoachClient.create(resolved_settings.openai_api_key)

    analysis_service = AnalysisService(
        estimator=estimator,
        client=nutrition_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    store = DailyLogStore(state.daily_logs)
    meal_log_service = MealLogService(
        store=store,
        undo_coordinator=UndoCoordinator(
            store=store,
            scheduler=AsyncioScheduler(),
            window_seconds=resolved_settings.undo_window_seconds,
        ),
        timezone=resolved_settings.timezone,
    )
    profile_service = ProfileService(state.profile)
    coach_service = CoachService(
        responder=AdviceResponder(),
        client=coach_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        history=state.chat_history,
    )

    def save_state() -> None:
        state_service.save(
            AppState(
                profile=profile_service.get_profile(),
                daily_logs=store.snapshot(),
                chat_history=list(coach_service.history),
            )
        )

    async def close_resources() -> None:
        for client in (nutrition_client, coach_client):
            if client is not None:
                await client.client.close()

    return AppContainer(
        settings=resolved_settings,
        state_service=state_service,
        profile_service=profile_service,
        analysis_service=analysis_service,
        meal_log_service=meal_log_service,
        coach_service=coach_service,
        save_state=save_state,
        close_resources=close_resources,
    )


def _build_state_repository(settings: Settings) -> StateRepository:
    backend = parse_state_backend(settings.state_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase state backend needs URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateRepository(client, table=settings.supabase_state_table)
    return FileStateRepository(Path(settings.state_file_path))


def _load_state(state_service: StateService) -> AppState:
    try:
        return state_service.load()
    except StateLoadError:
        _logger.exception("Failed to load stored state, starting empty")
        return AppState()
