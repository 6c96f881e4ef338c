import logging
from collections import Counter
from typing import Any

from app.models.movie import MovieRecord

logger = logging.getLogger(__name__)


def count_oscar_wins(nominations: list[dict[str, Any]]) -> Counter:
    """Count winning nominations per TMDB id."""
    wins: Counter = Counter()
    for nomination in nominations:
        if not nomination.get("won"):
            continue
        for movie in nomination.get("movies") or []:
            tmdb_id = movie.get("tmdb_id")
            if tmdb_id:
                wins[tmdb_id] += 1
    return wins


def enrich_oscar_wins(movies: list[MovieRecord], nominations: list[dict[str, Any]]) -> list[MovieRecord]:
    wins = count_oscar_wins(nominations)
    enriched = [movie.model_copy(update={"oscar_wins": wins.get(movie.id, 0)}) for movie in movies]
    logger.info(
        "Oscar wins applied",
        extra={
            "movies": len(enriched),
            "movies_with_wins": sum(1 for movie in enriched if movie.oscar_wins > 0),
        },
    )
    return enriched
