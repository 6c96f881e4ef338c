from pydantic import Field, model_serializer

from app.models.feedback import FeedbackResult
from app.models.movie import CamelModel, MovieRecord


class DailyResponse(CamelModel):
    puzzle_number: int
    date: str
    rounds_per_day: int
    categories: list[str]


class GuessRequest(CamelModel):
    guess: str = Field(max_length=200, description="free-text movie title")
    guess_count: int = Field(default=0, ge=0, description="guesses already made this round")
    round: int = Field(default=0, ge=0)
    date: str | None = Field(default=None, description="YYYY-MM-DD, defaults to today (UTC)")


class Lifelines(CamelModel):
    """Lifelines unlocked so far; locked ones are left out of the payload."""

    tagline: str | None = None
    overview: str | None = None

    @model_serializer(mode="wrap")
    def _drop_locked(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class GuessResponse(CamelModel):
    feedback: FeedbackResult
    guess_count: int
    solved: bool
    game_over: bool
    lifelines: Lifelines
    answer: MovieRecord | None = None


class HintRequest(CamelModel):
    hint_type: str
    round: int = Field(default=0, ge=0)
    date: str | None = None


class HintResponse(CamelModel):
    hint_type: str
    value: str


class TitlesResponse(CamelModel):
    titles: list[str]
