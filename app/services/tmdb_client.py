import asyncio
import logging
from typing import Any

import httpx

from app.core.errors import APIError
from app.core.settings import Settings

logger = logging.getLogger(__name__)

MovieBundle = tuple[dict[str, Any], dict[str, Any], dict[str, Any]]


class TMDBClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.tmdb_base_url,
            timeout=settings.tmdb_timeout_seconds,
            transport=transport,
        )
        self._min_interval_seconds = 1.0 / max(settings.tmdb_requests_per_second, 0.5)
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()

    async def close(self) -> None:
        await self._client.aclose()

    async def _throttle(self) -> None:
        async with self._lock:
            now = asyncio.get_running_loop().time()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval_seconds:
                await asyncio.sleep(self._min_interval_seconds - elapsed)
            self._last_request_time = asyncio.get_running_loop().time()

    async def _request(self, method: str, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self.settings.tmdb_api_key or self.settings.tmdb_api_key == "your_tmdb_api_key_here":
            raise APIError("config_error", "TMDB_API_KEY is not set", status_code=500)

        merged_params = {"api_key": self.settings.tmdb_api_key}
        if params:
            merged_params.update(params)

        backoff_seconds = 0.6
        for attempt in range(1, self.settings.tmdb_max_retries + 1):
            await self._throttle()
            try:
                response = await self._client.request(method, path, params=merged_params)
            except (httpx.TransportError, httpx.RemoteProtocolError, httpx.ReadTimeout) as exc:
                if attempt < self.settings.tmdb_max_retries:
                    await asyncio.sleep(backoff_seconds)
                    backoff_seconds *= 2
                    continue
                raise APIError(
                    "tmdb_upstream_unavailable",
                    "TMDB upstream is temporarily unavailable",
                    status_code=502,
                    details={"path": path, "error_type": exc.__class__.__name__},
                ) from exc

            if response.status_code < 400:
                return response.json()

            if response.status_code in {429, 500, 502, 503, 504} and attempt < self.settings.tmdb_max_retries:
                await asyncio.sleep(backoff_seconds)
                backoff_seconds *= 2
                continue

            if response.status_code == 401:
                raise APIError("tmdb_auth_error", "TMDB API key is invalid", status_code=502)

            raise APIError(
                "tmdb_request_failed",
                "TMDB request failed",
                status_code=502,
                details={"path": path, "status_code": response.status_code, "response": response.text[:200]},
            )

        raise APIError("tmdb_request_failed", "TMDB request retries exhausted", status_code=502)

    async def _collect_pages(self, path: str, pages: int, params: dict[str, Any], label: str) -> list[dict[str, Any]]:
        movies: list[dict[str, Any]] = []
        for page in range(1, pages + 1):
            payload = await self._request("GET", path, params={**params, "page": page})
            results = payload.get("results", [])
            if not results:
                break
            movies.extend(item for item in results if isinstance(item.get("id"), int))

            total_pages = payload.get("total_pages", page)
            if page >= total_pages:
                break

        logger.info("collected TMDB movie list", extra={"list": label, "pages": pages, "count": len(movies)})
        return movies

    async def fetch_movie_list(self, endpoint: str, pages: int) -> list[dict[str, Any]]:
        return await self._collect_pages(f"/movie/{endpoint}", pages, {"language": "en-US"}, endpoint)

    async def discover_movies(self, pages: int, min_vote_count: int) -> list[dict[str, Any]]:
        params = {
            "language": "en-US",
            "include_adult": "false",
            "sort_by": "vote_count.desc",
            "vote_count.gte": min_vote_count,
        }
        return await self._collect_pages("/discover/movie", pages, params, "discover")

    async def fetch_movie_details(self, movie_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/movie/{movie_id}", params={"language": "en-US"})

    async def fetch_movie_credits(self, movie_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/movie/{movie_id}/credits")

    async def fetch_watch_providers(self, movie_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/movie/{movie_id}/watch/providers")

    async def fetch_movie_bundle(self, movie_id: int) -> MovieBundle:
        details, credits, providers = await asyncio.gather(
            self.fetch_movie_details(movie_id),
            self.fetch_movie_credits(movie_id),
            self.fetch_watch_providers(movie_id),
        )
        return details, credits, providers

    async def fetch_bundles(self, ids: list[int], concurrency: int = 5) -> list[MovieBundle]:
        semaphore = asyncio.Semaphore(concurrency)

        async def _fetch(movie_id: int) -> MovieBundle | None:
            async with semaphore:
                try:
                    return await self.fetch_movie_bundle(movie_id)
                except APIError:
                    logger.exception("Failed TMDB fetch for movie", extra={"movie_id": movie_id})
                    return None

        results = await asyncio.gather(*[_fetch(movie_id) for movie_id in ids])
        return [entry for entry in results if entry is not None]
