"""Pydantic schemas for the showtimes feed."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

_FEED_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Metadata(BaseModel):
    """Film metadata from TMDb. Every field is None when there was no match."""

    model_config = _FEED_CONFIG

    overview: str | None = None
    poster_path: str | None = None
    rating: float | None = None
    year: str | None = None
    runtime: int | None = None
    trailer_url: str | None = None
    tmdb_id: int | None = None


class FilmMetadata(Metadata):
    """Metadata for one film of a double feature."""

    title: str


class Session(BaseModel):
    """One film's screenings at one venue on one date."""

    model_config = _FEED_CONFIG

    title: str
    times: list[str]
    url: str
    is_double_feature: bool = False
    premium_times: list[str] | None = None

    # Filled in by enrichment
    overview: str | None = None
    poster_path: str | None = None
    rating: float | None = None
    year: str | None = None
    runtime: int | None = None
    trailer_url: str | None = None
    films: list[FilmMetadata] | None = None

    @model_serializer(mode="wrap")
    def _omit_absent_optionals(self, handler: Any) -> dict[str, Any]:
        # premiumTimes and films only appear in the feed when they apply
        data = handler(self)
        for names in (("premium_times", "premiumTimes"), ("films",)):
            for name in names:
                if name in data and data[name] is None:
                    del data[name]
        return data


class VenueResult(BaseModel):
    """All sessions scraped from one cinema for one date."""

    model_config = _FEED_CONFIG

    cinema: str
    url: str
    sessions: list[Session] = Field(default_factory=list)
    note: str | None = None

    @model_serializer(mode="wrap")
    def _omit_absent_note(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if data.get("note") is None:
            data.pop("note", None)
        return data


class DayResult(BaseModel):
    """Every venue's results for one venue-local calendar day."""

    model_config = _FEED_CONFIG

    date: str  # display string, e.g. "Sunday, 18 October 2026"
    date_key: str  # YYYY-MM-DD
    cinemas: list[VenueResult] = Field(default_factory=list)


class Feed(BaseModel):
    """The complete feed written at the end of a run."""

    model_config = _FEED_CONFIG

    generated_at: datetime
    days: list[DayResult] = Field(default_factory=list)
