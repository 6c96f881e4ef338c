import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from app.models.feedback import DirectorSimilarity, SimilarityLabel
from app.models.movie import MovieRecord

logger = logging.getLogger(__name__)

WEIGHTS = {"genre": 0.4, "actor": 0.3, "region": 0.2, "decade": 0.1}
HOT_THRESHOLD = 0.5
WARM_THRESHOLD = 0.25
DECADE_FALLOFF_YEARS = 30
MAX_REASONS = 2


@dataclass(frozen=True)
class DirectorProfile:
    name: str
    genres: frozenset[str]
    actors: frozenset[str]
    regions: frozenset[str]
    median_year: int
    movie_count: int


@dataclass
class SimilarityBreakdown:
    genre_score: float
    actor_score: float
    region_score: float
    decade_score: float
    shared_genres: list[str] = field(default_factory=list)
    shared_actors: list[str] = field(default_factory=list)


def _median_year(years: list[int]) -> int:
    ordered = sorted(years)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    # .5 rounds up
    total = ordered[mid - 1] + ordered[mid]
    return (total + 1) // 2


def build_profile_index(movies: Iterable[MovieRecord]) -> Mapping[str, DirectorProfile]:
    """Aggregate catalog movies into one profile per lowercased director name."""
    names: dict[str, str] = {}
    genres: dict[str, set[str]] = {}
    actors: dict[str, set[str]] = {}
    regions: dict[str, set[str]] = {}
    years: dict[str, list[int]] = {}

    for movie in movies:
        key = movie.director.lower()
        if key not in names:
            names[key] = movie.director
            genres[key] = set()
            actors[key] = set()
            regions[key] = set()
            years[key] = []
        genres[key].update(g.lower() for g in movie.genres)
        actors[key].update(movie.actors)
        regions[key].update(movie.regions)
        years[key].append(movie.year)

    index = {
        key: DirectorProfile(
            name=names[key],
            genres=frozenset(genres[key]),
            actors=frozenset(actors[key]),
            regions=frozenset(regions[key]),
            median_year=_median_year(years[key]),
            movie_count=len(years[key]),
        )
        for key in names
    }
    return MappingProxyType(index)


class DirectorProfileIndex:
    """Builds the profile mapping once, on first use, from the catalog loader it was given."""

    def __init__(self, loader: Callable[[], Iterable[MovieRecord]]):
        self._loader = loader
        self._profiles: Mapping[str, DirectorProfile] | None = None
        self._lock = threading.Lock()

    @property
    def profiles(self) -> Mapping[str, DirectorProfile]:
        profiles = self._profiles
        if profiles is not None:
            return profiles
        with self._lock:
            if self._profiles is None:
                self._profiles = build_profile_index(self._loader())
                logger.info("Director profile index built", extra={"directors": len(self._profiles)})
            return self._profiles

    def get(self, name: str) -> DirectorProfile | None:
        return self.profiles.get(name.lower())

    def rebuild(self, movies: Iterable[MovieRecord] | None = None) -> Mapping[str, DirectorProfile]:
        with self._lock:
            source = list(movies) if movies is not None else self._loader()
            self._profiles = build_profile_index(source)
            logger.info("Director profile index rebuilt", extra={"directors": len(self._profiles)})
            return self._profiles


def jaccard(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> float:
    if not a and not b:
        return 0.0
    shared = len(a & b)
    return shared / (len(a) + len(b) - shared)


def shared_over_max(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> float:
    max_size = max(len(a), len(b))
    if max_size == 0:
        return 0.0
    return len(a & b) / max_size


def decade_proximity(year_a: int, year_b: int) -> float:
    return 1 - min(abs(year_a - year_b) / DECADE_FALLOFF_YEARS, 1)


def compute_breakdown(a: DirectorProfile, b: DirectorProfile) -> SimilarityBreakdown:
    return SimilarityBreakdown(
        genre_score=jaccard(a.genres, b.genres),
        actor_score=shared_over_max(a.actors, b.actors),
        region_score=jaccard(a.regions, b.regions),
        decade_score=decade_proximity(a.median_year, b.median_year),
        shared_genres=sorted(a.genres & b.genres),
        shared_actors=sorted(a.actors & b.actors),
    )


def score_from_breakdown(breakdown: SimilarityBreakdown) -> float:
    return (
        WEIGHTS["genre"] * breakdown.genre_score
        + WEIGHTS["actor"] * breakdown.actor_score
        + WEIGHTS["region"] * breakdown.region_score
        + WEIGHTS["decade"] * breakdown.decade_score
    )


def label_from_score(score: float) -> SimilarityLabel:
    if score >= HOT_THRESHOLD:
        return "Hot"
    if score >= WARM_THRESHOLD:
        return "Warm"
    return "Cold"


def _genre_reason(breakdown: SimilarityBreakdown) -> str:
    if not breakdown.shared_genres:
        return ""
    names = [genre[:1].upper() + genre[1:] for genre in breakdown.shared_genres]
    return f"Both direct {', '.join(names)}"


def _actor_reason(breakdown: SimilarityBreakdown) -> str:
    shared = breakdown.shared_actors
    if not shared:
        return ""
    if len(shared) <= 2:
        return f"Share actor {' & '.join(shared)}"
    return f"Share {len(shared)} actors"


def _region_reason(breakdown: SimilarityBreakdown) -> str:
    return "Available in similar regions" if breakdown.region_score >= 0.1 else ""


def _decade_reason(breakdown: SimilarityBreakdown) -> str:
    return "Active in similar era" if breakdown.decade_score >= 0.3 else ""


def generate_reasons(breakdown: SimilarityBreakdown) -> list[str]:
    factors = [
        (WEIGHTS["genre"] * breakdown.genre_score, _genre_reason),
        (WEIGHTS["actor"] * breakdown.actor_score, _actor_reason),
        (WEIGHTS["region"] * breakdown.region_score, _region_reason),
        (WEIGHTS["decade"] * breakdown.decade_score, _decade_reason),
    ]
    # sorted() is stable, so ties keep genre > actor > region > decade
    factors = sorted(factors, key=lambda item: item[0], reverse=True)

    reasons: list[str] = []
    for weighted, describe in factors:
        if len(reasons) >= MAX_REASONS:
            break
        if weighted <= 0:
            continue
        text = describe(breakdown)
        if text:
            reasons.append(text)
    return reasons


class DirectorSimilarityEngine:
    def __init__(self, index: DirectorProfileIndex):
        self.index = index

    def compare(self, director_a: str, director_b: str) -> DirectorSimilarity | None:
        """Score two directors; None means they are the same person (an exact match)."""
        if director_a.lower() == director_b.lower():
            return None

        profile_a = self.index.get(director_a)
        profile_b = self.index.get(director_b)
        if profile_a is None or profile_b is None:
            return DirectorSimilarity(score=0.0, label="Cold", reasons=[])

        breakdown = compute_breakdown(profile_a, profile_b)
        score = round(score_from_breakdown(breakdown), 3)
        return DirectorSimilarity(score=score, label=label_from_score(score), reasons=generate_reasons(breakdown))
