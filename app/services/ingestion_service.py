import json
import logging
import time
from pathlib import Path
from typing import Any

from app.core.errors import APIError
from app.core.settings import Settings
from app.models.ingest import CatalogBuildRequest, CatalogBuildResponse
from app.models.movie import MovieRecord
from app.services.normalizer import normalize_tmdb_movie
from app.services.tmdb_client import TMDBClient

logger = logging.getLogger(__name__)


def merge_listings(listings: list[list[dict[str, Any]]]) -> list[dict[str, Any]]:
    """Concatenate TMDB listings, keeping the first occurrence of every movie id."""
    seen_ids: set[int] = set()
    merged: list[dict[str, Any]] = []
    for listing in listings:
        for item in listing:
            movie_id = item.get("id")
            if movie_id in seen_ids:
                continue
            seen_ids.add(movie_id)
            merged.append(item)
    return merged


def write_catalog(path: str | Path, movies: list[MovieRecord]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    payload = [movie.model_dump(by_alias=True) for movie in movies]
    with output.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


class IngestionService:
    def __init__(self, settings: Settings, tmdb_client: TMDBClient):
        self.settings = settings
        self.tmdb_client = tmdb_client

    async def build_catalog(self, payload: CatalogBuildRequest) -> CatalogBuildResponse:
        start = time.perf_counter()
        min_votes = self.settings.tmdb_min_vote_count
        logger.info(
            "Catalog build started",
            extra={
                "top_rated_pages": payload.top_rated_pages,
                "popular_pages": payload.popular_pages,
                "now_playing_pages": payload.now_playing_pages,
                "discover_pages": payload.discover_pages,
                "min_vote_count": min_votes,
            },
        )

        # earlier listings win when the same movie shows up twice
        listings = [
            await self.tmdb_client.fetch_movie_list("top_rated", payload.top_rated_pages),
            await self.tmdb_client.fetch_movie_list("popular", payload.popular_pages),
            await self.tmdb_client.fetch_movie_list("now_playing", payload.now_playing_pages),
            await self.tmdb_client.discover_movies(payload.discover_pages, min_votes),
        ]
        merged = merge_listings(listings)
        kept = [item for item in merged if (item.get("vote_count") or 0) >= min_votes]
        filtered_out = len(merged) - len(kept)
        logger.info(
            "TMDB listings merged",
            extra={"unique_movies": len(merged), "filtered_out": filtered_out, "kept": len(kept)},
        )

        bundles = await self.tmdb_client.fetch_bundles(
            [item["id"] for item in kept],
            concurrency=self.settings.tmdb_fetch_concurrency,
        )

        movies: list[MovieRecord] = []
        failed = len(kept) - len(bundles)
        for details, credits, providers in bundles:
            movie = normalize_tmdb_movie(details, credits, providers, cast_limit=self.settings.tmdb_cast_limit)
            if movie is None:
                failed += 1
                continue
            movies.append(movie)

        if not movies:
            raise APIError("ingest_empty", "No valid movie records produced from TMDB", status_code=502)

        write_catalog(payload.output_path, movies)

        duration_ms = int((time.perf_counter() - start) * 1000)
        years = [movie.year for movie in movies]
        ratings = [movie.vote_average for movie in movies]
        logger.info(
            "Catalog build completed",
            extra={
                "written": len(movies),
                "failed": failed,
                "duration_ms": duration_ms,
                "output_path": payload.output_path,
                "year_range": [min(years), max(years)],
                "rating_range": [min(ratings), max(ratings)],
            },
        )

        return CatalogBuildResponse(
            discovered=len(merged),
            filtered_out=filtered_out,
            written=len(movies),
            failed=failed,
            duration_ms=duration_ms,
            output_path=payload.output_path,
        )
