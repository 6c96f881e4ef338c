from fastapi import APIRouter, Depends

from app.api.deps import get_container
from app.core.container import AppContainer
from app.models.game import TitlesResponse

router = APIRouter(prefix="/v1", tags=["catalog"])


@router.get("/titles", response_model=TitlesResponse)
async def list_titles(container: AppContainer = Depends(get_container)) -> TitlesResponse:
    return container.game_service.titles()
