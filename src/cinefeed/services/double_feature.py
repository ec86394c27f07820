"""Double-feature handling: two films sold as one session."""

import logging

from cinefeed.schemas.feed import FilmMetadata, Session
from cinefeed.services.metadata import MetadataLookup

logger = logging.getLogger(__name__)

# " + " wins over " & " when a title contains both
DOUBLE_FEATURE_SEPARATORS = (" + ", " & ")


def split_double_feature(title: str) -> list[str]:
    """
    Split a double-feature title into its films.

    Examples:
        "Alien + Aliens" → ["Alien", "Aliens"]
        "Heat & Collateral" → ["Heat", "Collateral"]
        "Nosferatu" → ["Nosferatu"]

    Returns a one-element list when no separator is present.
    """
    for separator in DOUBLE_FEATURE_SEPARATORS:
        if separator in title:
            parts = [part.strip() for part in title.split(separator)]
            parts = [part for part in parts if part]
            if len(parts) >= 2:
                return parts
    return [title.strip()]


def combine_metadata(films: list[FilmMetadata]) -> dict:
    """
    Merge per-film metadata into the fields shown on the double-feature card.

    - runtime: sum of the known runtimes (None if none are known)
    - poster, overview, trailer: first film's value, else the next film's
    - rating: mean of the known ratings (None if none are known)
    - year: first film's year
    """
    runtimes = [f.runtime for f in films if f.runtime]
    ratings = [f.rating for f in films if f.rating]

    return {
        "runtime": sum(runtimes) if runtimes else None,
        "poster_path": next((f.poster_path for f in films if f.poster_path), None),
        "overview": next((f.overview for f in films if f.overview), None),
        "trailer_url": next((f.trailer_url for f in films if f.trailer_url), None),
        "rating": sum(ratings) / len(ratings) if ratings else None,
        "year": films[0].year if films else None,
        "films": films,
    }


class DoubleFeatureResolver:
    """Looks up each film of a double feature and builds the combined card."""

    def __init__(self, lookup: MetadataLookup) -> None:
        self.lookup = lookup

    def applies_to(self, session: Session) -> bool:
        """A session is resolved as a double feature when flagged and splittable."""
        return session.is_double_feature and len(split_double_feature(session.title)) >= 2

    async def resolve(self, session: Session) -> Session:
        """Return a copy of ``session`` with per-film and combined metadata."""
        titles = split_double_feature(session.title)
        logger.debug(f"Double feature '{session.title}' -> {titles}")

        films: list[FilmMetadata] = []
        for title in titles:
            metadata = await self.lookup.lookup(title)
            films.append(FilmMetadata(title=title, **metadata.model_dump()))

        return session.model_copy(update=combine_metadata(films))
