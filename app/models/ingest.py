from pydantic import BaseModel, Field


class CatalogBuildRequest(BaseModel):
    top_rated_pages: int = Field(default=30, ge=0, le=500)
    popular_pages: int = Field(default=30, ge=0, le=500)
    now_playing_pages: int = Field(default=5, ge=0, le=500)
    discover_pages: int = Field(default=50, ge=0, le=500)
    output_path: str = Field(default="./data/movies.json", description="where the catalog JSON is written")


class CatalogBuildResponse(BaseModel):
    discovered: int
    filtered_out: int
    written: int
    failed: int
    duration_ms: int
    output_path: str
