import logging
import re

from app.core.errors import InvalidInputError, MovieNotFoundError
from app.models.movie import MovieRecord
from app.services.catalog import MovieCatalog

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_ARTICLE_RE = re.compile(r"^(the|a|an)\s+")


def normalize_title(title: str) -> str:
    lowered = _PUNCTUATION_RE.sub("", title.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def strip_articles(normalized: str) -> str:
    return _LEADING_ARTICLE_RE.sub("", normalized, count=1).strip()


def resolve_title(text: str, movies: list[MovieRecord] | MovieCatalog) -> MovieRecord | None:
    """Map free text to a catalog movie: exact, then article-insensitive, then substring."""
    normalized = normalize_title(text)
    if not normalized:
        return None
    return _resolve_normalized(normalized, [(normalize_title(m.title), m) for m in movies])


def _resolve_normalized(normalized: str, entries: list[tuple[str, MovieRecord]]) -> MovieRecord | None:
    for title, movie in entries:
        if title == normalized:
            return movie

    stripped = strip_articles(normalized)
    for title, movie in entries:
        if strip_articles(title) == stripped:
            return movie

    for title, movie in entries:
        if normalized in title or title in normalized:
            return movie

    return None


class TitleResolver:
    def __init__(self, catalog: MovieCatalog):
        self.catalog = catalog
        self._entries = [(normalize_title(movie.title), movie) for movie in catalog]

    def find(self, text: str) -> MovieRecord | None:
        normalized = normalize_title(text)
        if not normalized:
            return None
        return _resolve_normalized(normalized, self._entries)

    def resolve(self, text: str) -> MovieRecord:
        if not text or not text.strip():
            raise InvalidInputError("Missing or invalid guess")
        if not normalize_title(text):
            raise InvalidInputError("Guess has no letters or digits", details={"guess": text})

        movie = self.find(text)
        if movie is None:
            logger.info("Guess did not match any catalog title", extra={"guess": text})
            raise MovieNotFoundError(text)
        return movie
