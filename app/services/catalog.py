import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from app.core.errors import APIError
from app.models.movie import MovieRecord

logger = logging.getLogger(__name__)


class MovieCatalog:
    """Immutable, ordered view over the movie records loaded at startup."""

    def __init__(self, movies: Iterable[MovieRecord]):
        self._movies: tuple[MovieRecord, ...] = tuple(movies)

    def __len__(self) -> int:
        return len(self._movies)

    def __iter__(self) -> Iterator[MovieRecord]:
        return iter(self._movies)

    def __getitem__(self, index: int) -> MovieRecord:
        return self._movies[index]

    @property
    def movies(self) -> tuple[MovieRecord, ...]:
        return self._movies

    def titles(self) -> list[str]:
        return [movie.title for movie in self._movies]


def load_catalog(path: str | Path) -> MovieCatalog:
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise APIError(
            "catalog_unavailable",
            "Movie catalog file not found",
            status_code=500,
            details={"path": str(catalog_path)},
        )

    try:
        with catalog_path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise APIError(
            "catalog_unavailable",
            "Movie catalog is not valid JSON",
            status_code=500,
            details={"path": str(catalog_path), "line": exc.lineno},
        ) from exc

    if not isinstance(raw, list):
        raise APIError("catalog_unavailable", "Movie catalog must be a JSON array", status_code=500)

    try:
        movies = [MovieRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise APIError(
            "catalog_unavailable",
            "Movie catalog contains invalid records",
            status_code=500,
            details={"path": str(catalog_path), "errors": exc.error_count()},
        ) from exc

    logger.info("Movie catalog loaded", extra={"path": str(catalog_path), "movies": len(movies)})
    return MovieCatalog(movies)
