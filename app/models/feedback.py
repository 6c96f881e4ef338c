from typing import Literal

from app.models.movie import CamelModel

FeedbackColor = Literal["green", "yellow", "red"]
Direction = Literal["higher", "lower"] | None
SimilarityLabel = Literal["Hot", "Warm", "Cold"]


class DirectorSimilarity(CamelModel):
    score: float
    label: SimilarityLabel
    reasons: list[str]


class NumericFeedback(CamelModel):
    color: FeedbackColor
    direction: Direction
    value: int | float


class DirectorFeedback(CamelModel):
    color: FeedbackColor
    value: str
    # only set when the guessed director is not the answer
    similarity: DirectorSimilarity | None = None


class ListFeedback(CamelModel):
    color: FeedbackColor
    value: list[str]


class FeedbackResult(CamelModel):
    movie_title: str
    year: NumericFeedback
    director: DirectorFeedback
    genres: ListFeedback
    actors: ListFeedback
    rating: NumericFeedback
    oscars: NumericFeedback
