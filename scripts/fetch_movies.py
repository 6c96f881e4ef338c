#!/usr/bin/env python3
import argparse
import asyncio

from app.core.errors import APIError
from app.core.logging import configure_logging
from app.core.settings import get_settings
from app.models.ingest import CatalogBuildRequest
from app.services.ingestion_service import IngestionService
from app.services.tmdb_client import TMDBClient


async def _run(request: CatalogBuildRequest) -> int:
    settings = get_settings()
    client = TMDBClient(settings)
    try:
        result = await IngestionService(settings, client).build_catalog(request)
    except APIError as exc:
        print(f"[fetch] failed: {exc.code}: {exc.message}")
        return 1
    finally:
        await client.close()

    print(f"[fetch] wrote {result.written} movies to {result.output_path}")
    print(f"[fetch] filtered out {result.filtered_out} movies below the vote threshold, {result.failed} failed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the movie catalog JSON from TMDB listings.")
    parser.add_argument("--out", default="./data/movies.json", help="Path to write the catalog JSON.")
    parser.add_argument("--top-rated-pages", type=int, default=30)
    parser.add_argument("--popular-pages", type=int, default=30)
    parser.add_argument("--now-playing-pages", type=int, default=5)
    parser.add_argument("--discover-pages", type=int, default=50)
    return parser


def main() -> int:
    args = build_parser().parse_args()
    configure_logging(get_settings().log_level)
    request = CatalogBuildRequest(
        top_rated_pages=args.top_rated_pages,
        popular_pages=args.popular_pages,
        now_playing_pages=args.now_playing_pages,
        discover_pages=args.discover_pages,
        output_path=args.out,
    )
    return asyncio.run(_run(request))


if __name__ == "__main__":
    raise SystemExit(main())
