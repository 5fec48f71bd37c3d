"""Food catalog endpoints."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from health_tracker.api.auth import require_session
from health_tracker.api.schemas import FoodContribution
from health_tracker.domain.food_analysis import FoodAnalysis
from health_tracker.domain.sessions import UserSession
from health_tracker.food_database import FOOD_CATEGORIES
from health_tracker.services.nutrition import scale_nutrition

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("", dependencies=[Depends(require_session)])
async def search_foods(
    request: Request, query: str | None = None, category: str | None = None
) -> dict[str, object]:
    """Search bundled and shared foods."""
    container: AppContainer = request.app.state.container
    return {"foods": container.food_service.search(query, category)}


@router.get("/categories")
async def list_categories() -> dict[str, object]:
    return {"categories": list(FOOD_CATEGORIES)}


@router.get("/{food_id}", dependencies=[Depends(require_session)])
async def get_food(
    food_id: str, request: Request, weight_grams: float | None = None
) -> dict[str, object]:
    """Return a food, scaled to ``weight_grams`` when given."""
    container: AppContainer = request.app.state.container
    food = container.food_service.get_food(food_id)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    nutrition = (
        scale_nutrition(food, weight_grams) if weight_grams is not None else None
    )
    return {"food": food, "nutrition": nutrition}


@router.post("", status_code=status.HTTP_201_CREATED)
async def contribute_food(
    body: FoodContribution,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Save an AI estimate to the shared catalog."""
    container: AppContainer = request.app.state.container
    analysis = FoodAnalysis(**body.model_dump(exclude={"category"}))
    food = container.food_service.contribute(session, analysis, category=body.category)
    return {"food": food}
