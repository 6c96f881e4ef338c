from fastapi import APIRouter, Depends

from app.api.deps import get_container
from app.core.container import AppContainer
from app.models.game import HintRequest, HintResponse

router = APIRouter(prefix="/v1", tags=["game"])


@router.post("/hint", response_model=HintResponse)
async def reveal_hint(payload: HintRequest, container: AppContainer = Depends(get_container)) -> HintResponse:
    return container.game_service.hint(payload)
