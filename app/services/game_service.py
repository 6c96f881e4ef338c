import logging

from app.core.settings import Settings
from app.models.game import (
    DailyResponse,
    GuessRequest,
    GuessResponse,
    HintRequest,
    HintResponse,
    Lifelines,
    TitlesResponse,
)
from app.services.catalog import MovieCatalog
from app.services.daily_puzzle import DailySelector, normalize_date_key
from app.services.director_similarity import DirectorSimilarityEngine
from app.services.game_logic import compare_movies, is_solved
from app.services.hints import NO_TAGLINE, derive_hint, parse_hint_type
from app.services.title_resolver import TitleResolver

logger = logging.getLogger(__name__)

CATEGORIES = ["Year", "Director", "Genre", "Actors", "Rating", "Oscars"]


class GameService:
    def __init__(
        self,
        settings: Settings,
        catalog: MovieCatalog,
        selector: DailySelector,
        resolver: TitleResolver,
        similarity_engine: DirectorSimilarityEngine,
    ):
        self.settings = settings
        self.catalog = catalog
        self.selector = selector
        self.resolver = resolver
        self.similarity_engine = similarity_engine

    def daily(self, date_key: str | None = None) -> DailyResponse:
        date = normalize_date_key(date_key)
        return DailyResponse(
            puzzle_number=self.selector.puzzle_number(date),
            date=date,
            rounds_per_day=self.selector.rounds_per_day,
            categories=list(CATEGORIES),
        )

    def _lifelines(self, guess_count: int, solved: bool, tagline: str, overview: str) -> Lifelines:
        lifelines = Lifelines()
        if solved:
            return lifelines
        if guess_count >= self.settings.tagline_threshold:
            lifelines.tagline = tagline or NO_TAGLINE
        if guess_count >= self.settings.overview_threshold:
            lifelines.overview = overview
        return lifelines

    def guess(self, request: GuessRequest) -> GuessResponse:
        date = normalize_date_key(request.date)
        target = self.selector.get_target(date, request.round)
        guessed = self.resolver.resolve(request.guess)

        feedback = compare_movies(guessed, target, self.similarity_engine)
        guess_count = request.guess_count + 1
        solved = is_solved(guessed, target)
        game_over = solved or guess_count >= self.settings.max_guesses

        response = GuessResponse(
            feedback=feedback,
            guess_count=guess_count,
            solved=solved,
            game_over=game_over,
            lifelines=self._lifelines(guess_count, solved, target.tagline, target.overview),
            answer=target if game_over else None,
        )
        logger.info(
            "Guess scored",
            extra={
                "date": date,
                "round": request.round,
                "guess_title": guessed.title,
                "guess_count": guess_count,
                "solved": solved,
                "game_over": game_over,
                "director_color": feedback.director.color,
            },
        )
        return response

    def hint(self, request: HintRequest) -> HintResponse:
        date = normalize_date_key(request.date)
        hint_type = parse_hint_type(request.hint_type)
        target = self.selector.get_target(date, request.round)
        value = derive_hint(target, hint_type, self.settings.poster_base_url)
        logger.info("Hint revealed", extra={"date": date, "round": request.round, "hint_type": hint_type})
        return HintResponse(hint_type=request.hint_type, value=value)

    def titles(self) -> TitlesResponse:
        return TitlesResponse(titles=self.catalog.titles())
