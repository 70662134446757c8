"""FastAPI application factory."""

import logging
from dataclasses import asdict
from typing import Literal

from fastapi import FastAPI, HTTPException, Request, status

from dosha_diet.api.models import PlanRequest, QuizRequest
from dosha_diet.app_logging import configure_logging
from dosha_diet.containers import AppContainer
from dosha_diet.domain.foods import FoodItem
from dosha_diet.services.catalog import CatalogError
from dosha_diet.services.quiz import QuizError, score_quiz


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plans", status_code=status.HTTP_201_CREATED)
    async def generate_plan(body: PlanRequest, request: Request) -> dict[str, object]:
        """Generate a diet plan for the submitted profile."""
        state_container: AppContainer = request.app.state.container
        try:
            plan = state_container.plan_service.generate(
                body.profile.to_profile(),
                plan_type=body.plan_type,
                target_calories=body.target_calories,
            )
        except CatalogError as exc:
            logger.exception("Food catalog unavailable")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
            ) from exc
        return {"user_id": body.user_id, **asdict(plan)}

    @app.post("/quiz/score")
    async def quiz_score(body: QuizRequest) -> dict[str, object]:
        """Score a prakriti quiz and return the constitution."""
        try:
            result = score_quiz([answer.to_answer() for answer in body.answers])
        except QuizError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return asdict(result)

    @app.get("/foods")
    async def list_foods(  # noqa: PLR0913
        request: Request,
        dosha: Literal["Vata", "Pitta", "Kapha", "Balancing"] | None = None,
        season: str | None = None,
        type: str | None = None,  # noqa: A002
        q: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict[str, object]:
        """Browse the food catalog."""
        page = max(page, 1)
        limit = max(limit, 1)
        state_container: AppContainer = request.app.state.container
        try:
            foods = state_container.catalog_service.search(
                dosha=dosha,
                season=season,
                category=type,
                query=q,
                page=page,
                limit=limit,
            )
        except CatalogError as exc:
            logger.exception("Food catalog unavailable")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
            ) from exc
        return {"items": [_format_food(food) for food in foods], "page": page}

    return app


def _format_food(food: FoodItem) -> dict[str, object]:
    return {
        "food_id": food.id,
        "name": food.name,
        "type": food.category.value,
        "dosha_tags": sorted(tag.value for tag in food.dosha_tags),
        "tastes": [taste.value for taste in food.tastes],
        "qualities": [quality.value for quality in food.qualities],
        "energy": food.energy.value if food.energy else None,
        "season": sorted(season.value for season in food.seasons),
        "calories_100g": food.macros.calories,
        "protein_100g": food.macros.protein_g,
        "carbs_100g": food.macros.carbs_g,
        "fat_100g": food.macros.fat_g,
    }
