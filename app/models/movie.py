from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WatchProvider(CamelModel):
    name: str
    logo_path: str = ""


class WatchProviderRegion(CamelModel):
    link: str | None = None
    providers: list[WatchProvider] = Field(default_factory=list)


class MovieRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    title: str
    year: int
    director: str
    genres: list[str] = Field(default_factory=list)
    actors: list[str] = Field(default_factory=list)
    tagline: str = ""
    overview: str = ""
    poster_path: str = ""
    vote_average: float = 0.0
    vote_count: int = 0
    oscar_wins: int = 0
    watch_providers: dict[str, WatchProviderRegion] = Field(default_factory=dict)

    @field_validator("tagline", "overview", "poster_path", mode="before")
    @classmethod
    def _none_to_empty(cls, value: str | None) -> str:
        return value or ""

    @field_validator("oscar_wins", mode="before")
    @classmethod
    def _missing_oscars(cls, value: int | None) -> int:
        return value or 0

    @property
    def regions(self) -> set[str]:
        return set(self.watch_providers.keys())
