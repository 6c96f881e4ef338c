from fastapi import APIRouter, Depends

from app.api.deps import get_container
from app.core.container import AppContainer
from app.models.game import GuessRequest, GuessResponse

router = APIRouter(prefix="/v1", tags=["game"])


@router.post("/guess", response_model=GuessResponse)
async def submit_guess(payload: GuessRequest, container: AppContainer = Depends(get_container)) -> GuessResponse:
    return container.game_service.guess(payload)
