"""Enrich scraped sessions with canonical times and TMDb metadata."""

import logging

from cinefeed.schemas.feed import Session, VenueResult
from cinefeed.services.double_feature import DoubleFeatureResolver
from cinefeed.services.metadata import MetadataLookup
from cinefeed.utils.times import normalise_time

logger = logging.getLogger(__name__)


class Enricher:
    """
    Turns a scraped ``VenueResult`` into the form written to the feed.

    Times are standardised first, then each session gets metadata: double
    features through ``DoubleFeatureResolver``, everything else through a
    single lookup. Sessions are handled one at a time.
    """

    def __init__(self, lookup: MetadataLookup | None = None) -> None:
        self.lookup = lookup or MetadataLookup()
        self.double_features = DoubleFeatureResolver(self.lookup)

    async def enrich_venue(self, venue: VenueResult) -> VenueResult:
        logger.info(f"Enriching {venue.cinema} with TMDb data...")
        sessions = [await self.enrich_session(session) for session in venue.sessions]
        return venue.model_copy(update={"sessions": sessions})

    async def enrich_session(self, session: Session) -> Session:
        session = session.model_copy(
            update={
                "times": [normalise_time(t) for t in session.times],
                "premium_times": (
                    [normalise_time(t) for t in session.premium_times]
                    if session.premium_times is not None
                    else None
                ),
            }
        )

        if self.double_features.applies_to(session):
            return await self.double_features.resolve(session)

        metadata = await self.lookup.lookup(session.title)
        return session.model_copy(
            update=metadata.model_dump(exclude={"tmdb_id"})
        )
