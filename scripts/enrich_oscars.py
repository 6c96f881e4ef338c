#!/usr/bin/env python3
import argparse
import json
from pathlib import Path
from typing import Any

from app.core.logging import configure_logging
from app.core.settings import get_settings
from app.services.catalog import load_catalog
from app.services.ingestion_service import write_catalog
from app.services.oscar_enrichment import enrich_oscar_wins


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fill oscarWins in the catalog from an Academy Awards nominations dump.")
    parser.add_argument("--nominations", default="./data/oscar-nominations.json", help="json-nominations export.")
    parser.add_argument("--catalog", default="./data/movies.json", help="Catalog JSON to update in place.")
    parser.add_argument("--top", type=int, default=10, help="How many top winners to print.")
    return parser


def main() -> int:
    args = build_parser().parse_args()
    configure_logging(get_settings().log_level)

    nominations = _load_json(Path(args.nominations))
    movies = enrich_oscar_wins(list(load_catalog(args.catalog)), nominations)
    write_catalog(args.catalog, movies)

    winners = sorted(movies, key=lambda movie: movie.oscar_wins, reverse=True)[: args.top]
    print(f"[oscars] {sum(1 for m in movies if m.oscar_wins)} of {len(movies)} movies have wins")
    for movie in winners:
        print(f"  {movie.oscar_wins} wins - {movie.title}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
