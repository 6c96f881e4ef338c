import threading

import pytest

from app.models.movie import MovieRecord, WatchProviderRegion
from app.services.director_similarity import (
    DirectorProfile,
    DirectorProfileIndex,
    DirectorSimilarityEngine,
    SimilarityBreakdown,
    build_profile_index,
    compute_breakdown,
    generate_reasons,
    label_from_score,
)


def _movie(
    movie_id: int,
    year: int,
    director: str,
    genres: list[str],
    actors: list[str],
    regions: list[str],
) -> MovieRecord:
    return MovieRecord(
        id=movie_id,
        title=f"Movie {movie_id}",
        year=year,
        director=director,
        genres=genres,
        actors=actors,
        vote_average=7.0,
        watch_providers={code: WatchProviderRegion(providers=[]) for code in regions},
    )


def _movies() -> list[MovieRecord]:
    return [
        _movie(1, 2000, "Dir One", ["Action", "Drama"], ["Alice", "Bob"], ["US", "GB"]),
        _movie(2, 2010, "Dir One", ["Drama", "Thriller"], ["Bob", "Carol"], ["US", "FR"]),
        _movie(3, 2020, "Dir Two", ["Comedy"], ["Dave"], ["JP"]),
        _movie(4, 2006, "Dir Three", ["Drama", "Thriller"], ["Bob", "Carol"], ["US", "FR"]),
    ]


def _engine(movies: list[MovieRecord] | None = None) -> DirectorSimilarityEngine:
    catalog = movies if movies is not None else _movies()
    return DirectorSimilarityEngine(DirectorProfileIndex(lambda: catalog))


def _profile(name: str, genres: set[str], actors: set[str], regions: set[str], median_year: int) -> DirectorProfile:
    return DirectorProfile(
        name=name,
        genres=frozenset(genres),
        actors=frozenset(actors),
        regions=frozenset(regions),
        median_year=median_year,
        movie_count=1,
    )


def test_profile_aggregates_across_movies() -> None:
    index = build_profile_index(_movies())
    profile = index["dir one"]

    assert profile.name == "Dir One"
    assert profile.genres == {"action", "drama", "thriller"}
    assert profile.actors == {"Alice", "Bob", "Carol"}
    assert profile.regions == {"US", "GB", "FR"}
    assert profile.median_year == 2005
    assert profile.movie_count == 2
    assert index["dir two"].median_year == 2020


def test_profile_uses_first_movie_casing() -> None:
    movies = [
        _movie(1, 2000, "Bong Joon-ho", ["Drama"], ["A"], []),
        _movie(2, 2003, "BONG JOON-HO", ["Crime"], ["B"], []),
    ]
    index = build_profile_index(movies)
    assert list(index) == ["bong joon-ho"]
    assert index["bong joon-ho"].name == "Bong Joon-ho"


def test_median_year_rounds_half_up_and_handles_odd_counts() -> None:
    movies = [
        _movie(1, 2001, "Even", [], [], []),
        _movie(2, 2000, "Even", [], [], []),
        _movie(3, 1990, "Odd", [], [], []),
        _movie(4, 2010, "Odd", [], [], []),
        _movie(5, 1995, "Odd", [], [], []),
    ]
    index = build_profile_index(movies)
    assert index["even"].median_year == 2001
    assert index["odd"].median_year == 1995


def test_rebuilding_is_deterministic() -> None:
    assert dict(build_profile_index(_movies())) == dict(build_profile_index(_movies()))


def test_profile_index_is_read_only() -> None:
    index = build_profile_index(_movies())
    with pytest.raises(TypeError):
        index["new"] = index["dir one"]  # type: ignore[index]


def test_index_builds_once_on_first_use() -> None:
    calls: list[int] = []

    def _loader() -> list[MovieRecord]:
        calls.append(1)
        return _movies()

    index = DirectorProfileIndex(_loader)
    assert calls == []
    assert index.get("Dir One") is not None
    assert index.get("DIR TWO") is not None
    assert index.get("nobody") is None
    assert len(calls) == 1


def test_concurrent_first_use_builds_once() -> None:
    workers = 8
    entered = threading.Event()
    release = threading.Event()
    start = threading.Barrier(workers)
    calls: list[int] = []

    def _loader() -> list[MovieRecord]:
        calls.append(1)
        entered.set()
        release.wait(timeout=5)
        return _movies()

    index = DirectorProfileIndex(_loader)
    seen: list[object] = []
    found: list[bool] = []

    def _worker() -> None:
        start.wait(timeout=5)
        found.append(index.get("Dir One") is not None)
        seen.append(index.profiles)

    threads = [threading.Thread(target=_worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    assert entered.wait(timeout=5)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert len(calls) == 1
    assert found == [True] * workers
    assert len(seen) == workers
    assert all(profiles is seen[0] for profiles in seen)


def test_index_rebuild_with_alternate_catalog() -> None:
    index = DirectorProfileIndex(_movies)
    assert index.get("dir two") is not None

    index.rebuild([_movie(9, 1999, "Someone Else", ["Horror"], ["Zed"], ["DE"])])

    assert index.get("dir two") is None
    assert index.get("someone else").median_year == 1999


def test_breakdown_identical_profiles_score_one() -> None:
    profile = _profile("Test", {"action", "drama"}, {"Alice", "Bob"}, {"US", "GB"}, 2000)
    breakdown = compute_breakdown(profile, profile)
    assert breakdown.genre_score == 1
    assert breakdown.actor_score == 1
    assert breakdown.region_score == 1
    assert breakdown.decade_score == 1


def test_breakdown_disjoint_profiles_score_zero() -> None:
    a = _profile("A", {"action"}, {"Alice"}, {"US"}, 1970)
    b = _profile("B", {"comedy"}, {"Bob"}, {"JP"}, 2020)
    breakdown = compute_breakdown(a, b)
    assert breakdown.genre_score == 0
    assert breakdown.actor_score == 0
    assert breakdown.region_score == 0
    assert breakdown.decade_score == 0
    assert breakdown.shared_genres == []
    assert breakdown.shared_actors == []
    assert generate_reasons(breakdown) == []


def test_breakdown_partial_overlap() -> None:
    a = _profile("A", {"action", "drama", "sci-fi"}, {"Alice", "Bob", "Carol"}, {"US"}, 2010)
    b = _profile("B", {"drama", "thriller"}, {"Bob", "Dave"}, {"US", "GB"}, 2015)
    breakdown = compute_breakdown(a, b)
    assert breakdown.shared_genres == ["drama"]
    assert breakdown.shared_actors == ["Bob"]
    assert breakdown.genre_score == pytest.approx(1 / 4)
    # divided by the larger cast, not the union
    assert breakdown.actor_score == pytest.approx(1 / 3)
    assert breakdown.region_score == pytest.approx(1 / 2)
    assert breakdown.decade_score == pytest.approx(1 - 5 / 30)


def test_empty_sets_score_zero() -> None:
    a = _profile("A", set(), set(), set(), 2000)
    breakdown = compute_breakdown(a, a)
    assert breakdown.genre_score == 0
    assert breakdown.actor_score == 0
    assert breakdown.region_score == 0


def test_label_thresholds() -> None:
    assert label_from_score(0.5) == "Hot"
    assert label_from_score(0.499) == "Warm"
    assert label_from_score(0.25) == "Warm"
    assert label_from_score(0.249) == "Cold"
    assert label_from_score(0.0) == "Cold"


def test_same_director_is_not_scored() -> None:
    engine = _engine()
    assert engine.compare("Dir One", "Dir One") is None
    assert engine.compare("dir one", "DIR ONE") is None


def test_unknown_directors_are_cold() -> None:
    result = _engine().compare("zzz_unknown", "yyy_unknown")
    assert result is not None
    assert result.score == 0
    assert result.label == "Cold"
    assert result.reasons == []

    half_known = _engine().compare("Dir One", "yyy_unknown")
    assert half_known.score == 0
    assert half_known.label == "Cold"


def test_close_directors_are_hot_with_ranked_reasons() -> None:
    result = _engine().compare("Dir One", "Dir Three")
    assert result.score == pytest.approx(0.697)
    assert result.label == "Hot"
    assert result.reasons == ["Both direct Drama, Thriller", "Share actor Bob & Carol"]


def test_distant_directors_only_share_era() -> None:
    result = _engine().compare("Dir One", "Dir Two")
    assert result.score == pytest.approx(0.05)
    assert result.label == "Cold"
    assert result.reasons == ["Active in similar era"]


def test_similarity_is_symmetric() -> None:
    engine = _engine()
    for a, b in [("Dir One", "Dir Two"), ("Dir One", "Dir Three"), ("Dir Two", "Dir Three")]:
        forward = engine.compare(a, b)
        backward = engine.compare(b, a)
        assert forward.score == backward.score
        assert forward.label == backward.label
        assert 0 <= forward.score <= 1


def test_many_shared_actors_are_counted() -> None:
    breakdown = SimilarityBreakdown(
        genre_score=0.0,
        actor_score=1.0,
        region_score=0.0,
        decade_score=0.0,
        shared_actors=["A", "B", "C"],
    )
    assert generate_reasons(breakdown) == ["Share 3 actors"]


def test_reason_texts_respect_minimums() -> None:
    breakdown = SimilarityBreakdown(genre_score=0.0, actor_score=0.0, region_score=0.05, decade_score=0.2)
    assert generate_reasons(breakdown) == []


def test_reasons_capped_at_two() -> None:
    breakdown = SimilarityBreakdown(
        genre_score=0.5,
        actor_score=0.5,
        region_score=0.5,
        decade_score=1.0,
        shared_genres=["drama"],
        shared_actors=["Bob"],
    )
    assert generate_reasons(breakdown) == ["Both direct Drama", "Share actor Bob"]
