from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.daily import router as daily_router
from app.api.guess import router as guess_router
from app.api.health import router as health_router
from app.api.hint import router as hint_router
from app.api.titles import router as titles_router
from app.core.container import AppContainer
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.core.settings import get_settings


def create_app(container: AppContainer | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        configure_logging(settings.log_level)
        app.state.settings = settings
        if container is None:
            app.state.container = AppContainer(settings)
        yield

    app = FastAPI(title="Reelguess API", version="0.1.0", lifespan=lifespan)
    if container is not None:
        app.state.container = container
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(daily_router)
    app.include_router(guess_router)
    app.include_router(hint_router)
    app.include_router(titles_router)
    return app


app = create_app()
