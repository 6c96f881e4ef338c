import logging

from app.core.settings import Settings
from app.services.catalog import MovieCatalog, load_catalog
from app.services.daily_puzzle import DailySelector
from app.services.director_similarity import DirectorProfileIndex, DirectorSimilarityEngine
from app.services.game_service import GameService
from app.services.title_resolver import TitleResolver

logger = logging.getLogger(__name__)


class AppContainer:
    def __init__(self, settings: Settings, catalog: MovieCatalog | None = None):
        self.settings = settings

        self.catalog = catalog if catalog is not None else load_catalog(settings.catalog_path)
        self.selector = DailySelector(
            self.catalog,
            rounds_per_day=settings.rounds_per_day,
            launch_date=settings.launch_date,
        )
        self.resolver = TitleResolver(self.catalog)
        self.profile_index = DirectorProfileIndex(lambda: self.catalog.movies)
        self.similarity_engine = DirectorSimilarityEngine(self.profile_index)

        self.game_service = GameService(
            settings=settings,
            catalog=self.catalog,
            selector=self.selector,
            resolver=self.resolver,
            similarity_engine=self.similarity_engine,
        )

        logger.info(
            "App container initialized",
            extra={
                "environment": settings.environment,
                "catalog_path": settings.catalog_path,
                "catalog_size": len(self.catalog),
                "rounds_per_day": settings.rounds_per_day,
                "launch_date": settings.launch_date.isoformat(),
                "max_guesses": settings.max_guesses,
            },
        )
        if len(self.catalog) < settings.rounds_per_day:
            logger.warning(
                "Catalog is smaller than rounds per day, rounds may repeat a movie",
                extra={"catalog_size": len(self.catalog), "rounds_per_day": settings.rounds_per_day},
            )
