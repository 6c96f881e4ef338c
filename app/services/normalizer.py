from typing import Any

from app.models.movie import MovieRecord, WatchProvider, WatchProviderRegion


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _director_name(credits: dict[str, Any]) -> str:
    for person in credits.get("crew") or []:
        if person.get("job") == "Director":
            name = _safe_str(person.get("name"))
            if name:
                return name
    return "Unknown"


def _top_billed(credits: dict[str, Any], cast_limit: int) -> list[str]:
    cast = sorted(credits.get("cast") or [], key=lambda person: person.get("order", 0))
    actors = []
    for person in cast[:cast_limit]:
        name = _safe_str(person.get("name"))
        if name:
            actors.append(name)
    return actors


def _streaming_regions(providers: dict[str, Any]) -> dict[str, WatchProviderRegion]:
    regions: dict[str, WatchProviderRegion] = {}
    for country, entry in (providers.get("results") or {}).items():
        flatrate = entry.get("flatrate") or []
        if not flatrate:
            continue
        regions[country] = WatchProviderRegion(
            link=entry.get("link"),
            providers=[
                WatchProvider(name=_safe_str(p.get("provider_name")), logo_path=_safe_str(p.get("logo_path")))
                for p in flatrate
            ],
        )
    return regions


def normalize_tmdb_movie(
    details: dict[str, Any],
    credits: dict[str, Any],
    providers: dict[str, Any],
    cast_limit: int = 5,
) -> MovieRecord | None:
    movie_id = details.get("id")
    title = _safe_str(details.get("title"))
    release_date = _safe_str(details.get("release_date"))

    if not isinstance(movie_id, int) or not title:
        return None
    # the year category needs a release year
    if len(release_date) < 4 or not release_date[:4].isdigit():
        return None

    genres = []
    for genre in details.get("genres", []):
        name = _safe_str(genre.get("name"))
        if name:
            genres.append(name)

    vote_average = details.get("vote_average")
    rating = round(float(vote_average), 1) if isinstance(vote_average, (int, float)) else 0.0
    vote_count = details.get("vote_count")

    return MovieRecord(
        id=movie_id,
        title=title,
        year=int(release_date[:4]),
        director=_director_name(credits),
        genres=genres,
        actors=_top_billed(credits, cast_limit),
        tagline=_safe_str(details.get("tagline")),
        overview=_safe_str(details.get("overview")),
        poster_path=_safe_str(details.get("poster_path")),
        vote_average=rating,
        vote_count=vote_count if isinstance(vote_count, int) else 0,
        oscar_wins=0,
        watch_providers=_streaming_regions(providers),
    )
