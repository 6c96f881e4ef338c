from app.models.feedback import (
    DirectorFeedback,
    Direction,
    FeedbackColor,
    FeedbackResult,
    ListFeedback,
    NumericFeedback,
)
from app.models.movie import MovieRecord
from app.services.director_similarity import DirectorSimilarityEngine

YEAR_NEAR = 5
RATING_EXACT = 0.5
RATING_NEAR = 1.5
OSCARS_NEAR = 3


def _direction(guess: float, target: float) -> Direction:
    if guess == target:
        return None
    return "higher" if target > guess else "lower"


def compare_year(guess: int, target: int) -> NumericFeedback:
    diff = abs(guess - target)
    if diff == 0:
        color: FeedbackColor = "green"
    elif diff <= YEAR_NEAR:
        color = "yellow"
    else:
        color = "red"
    return NumericFeedback(color=color, direction=_direction(guess, target), value=guess)


def compare_rating(guess: float, target: float) -> NumericFeedback:
    # rating is the only numeric category with a tolerance on the exact tier;
    # ratings carry one decimal, so compare in tenths
    diff = round(abs(guess - target), 1)
    if diff <= RATING_EXACT:
        color: FeedbackColor = "green"
    elif diff <= RATING_NEAR:
        color = "yellow"
    else:
        color = "red"
    return NumericFeedback(color=color, direction=_direction(guess, target), value=guess)


def compare_oscars(guess: int, target: int) -> NumericFeedback:
    diff = abs(guess - target)
    if diff == 0:
        color: FeedbackColor = "green"
    elif diff <= OSCARS_NEAR:
        color = "yellow"
    else:
        color = "red"
    return NumericFeedback(color=color, direction=_direction(guess, target), value=guess)


def compare_director(
    guess: str,
    target: str,
    similarity_engine: DirectorSimilarityEngine | None = None,
) -> DirectorFeedback:
    if guess.lower() == target.lower():
        return DirectorFeedback(color="green", value=guess)
    similarity = similarity_engine.compare(guess, target) if similarity_engine is not None else None
    return DirectorFeedback(color="red", value=guess, similarity=similarity)


def _compare_sets(guess: list[str], guess_set: set[str], target_set: set[str]) -> ListFeedback:
    if len(guess_set) == len(target_set) and guess_set <= target_set:
        return ListFeedback(color="green", value=list(guess))
    if guess_set & target_set:
        return ListFeedback(color="yellow", value=list(guess))
    return ListFeedback(color="red", value=list(guess))


def compare_genres(guess: list[str], target: list[str]) -> ListFeedback:
    return _compare_sets(guess, {g.lower() for g in guess}, {g.lower() for g in target})


def compare_actors(guess: list[str], target: list[str]) -> ListFeedback:
    # actor names are matched exactly, unlike genres
    return _compare_sets(guess, set(guess), set(target))


def compare_movies(
    guess: MovieRecord,
    target: MovieRecord,
    similarity_engine: DirectorSimilarityEngine | None = None,
) -> FeedbackResult:
    """Score a guessed movie against the target, one colored tier per category."""
    return FeedbackResult(
        movie_title=guess.title,
        year=compare_year(guess.year, target.year),
        director=compare_director(guess.director, target.director, similarity_engine),
        genres=compare_genres(guess.genres, target.genres),
        actors=compare_actors(guess.actors, target.actors),
        rating=compare_rating(guess.vote_average, target.vote_average),
        oscars=compare_oscars(guess.oscar_wins, target.oscar_wins),
    )


def is_solved(guess: MovieRecord, target: MovieRecord) -> bool:
    return guess.title.lower() == target.title.lower()
