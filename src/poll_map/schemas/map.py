"""Pydantic v2 response schemas for the map JSON endpoints."""

from pydantic import BaseModel, Field


class CountySummary(BaseModel):
    """County list entry."""

    name: str
    has_data: bool
    township_count: int = 0
    winning_party: str | None = None


class CountyListResponse(BaseModel):
    items: list[CountySummary] = Field(default_factory=list)
    total: int = 0


class RefreshResponse(BaseModel):
    """Outcome of reloading the dataset from the backend."""

    counties: int
    counties_with_data: int
    county_winners: int
    winner_lookup_pending: bool = False
    errors: list[str] = Field(default_factory=list)
