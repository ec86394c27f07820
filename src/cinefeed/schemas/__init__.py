"""Pydantic schemas for the showtimes feed."""

from cinefeed.schemas.feed import (
    DayResult,
    Feed,
    FilmMetadata,
    Metadata,
    Session,
    VenueResult,
)

__all__ = [
    "DayResult",
    "Feed",
    "FilmMetadata",
    "Metadata",
    "Session",
    "VenueResult",
]
