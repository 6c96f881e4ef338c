from fastapi import APIRouter, Depends, Query

from app.api.deps import get_container
from app.core.container import AppContainer
from app.models.game import DailyResponse

router = APIRouter(prefix="/v1", tags=["daily"])


@router.get("/daily", response_model=DailyResponse)
async def daily_puzzle(
    date: str | None = Query(default=None, description="YYYY-MM-DD, defaults to today (UTC)"),
    container: AppContainer = Depends(get_container),
) -> DailyResponse:
    return container.game_service.daily(date)
