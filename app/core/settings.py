from datetime import date
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Reelguess API"
    environment: Literal["dev", "test", "prod"] = "dev"
    log_level: str = "INFO"

    catalog_path: str = "./data/movies.json"

    rounds_per_day: int = Field(default=5, ge=1, le=20)
    launch_date: date = date(2026, 2, 11)
    max_guesses: int = Field(default=10, ge=1)
    # lifelines unlock once the guess count reaches these values
    tagline_threshold: int = Field(default=4, ge=1)
    overview_threshold: int = Field(default=7, ge=1)
    poster_base_url: str = "https://image.tmdb.org/t/p/w200"

    tmdb_api_key: str | None = None
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout_seconds: float = 20.0
    tmdb_max_retries: int = 3
    tmdb_requests_per_second: float = 3.0
    tmdb_min_vote_count: int = Field(default=1000, ge=0)
    tmdb_cast_limit: int = Field(default=5, ge=1, le=20)
    tmdb_fetch_concurrency: int = Field(default=5, ge=1, le=20)


@lru_cache
def get_settings() -> Settings:
    return Settings()
